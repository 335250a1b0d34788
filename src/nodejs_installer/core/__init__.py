"""Core utilities shared across nodejs-installer."""
