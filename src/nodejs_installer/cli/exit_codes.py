"""Exit codes for the nodejs-installer CLI.

- 0: Success (including "already installed")
- 2: Install failure (unpack, move or delete error)
- 3: Invalid usage (bad arguments, unsupported platform, bad config)
- 4: Network failure (version listing or artifact unreachable, unparsable listing)
"""

from __future__ import annotations

EXIT_SUCCESS = 0
EXIT_INSTALL_FAILURE = 2
EXIT_INVALID_USAGE = 3
EXIT_NETWORK_FAILURE = 4
