"""nodejs-installer: project-local Node.js runtime installer."""

__version__ = "0.1.0"
