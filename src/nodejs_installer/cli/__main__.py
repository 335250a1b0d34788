"""Allow ``python -m nodejs_installer.cli``."""

from nodejs_installer.cli import main

raise SystemExit(main())
