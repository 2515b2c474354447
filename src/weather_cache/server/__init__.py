"""HTTP surface and command line entry point."""

from .app import create_app

__all__ = ["create_app"]
