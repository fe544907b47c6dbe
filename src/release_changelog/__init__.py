"""
Top-level package for release_changelog.

This package exposes the main CLI entry point via the
``release_changelog.cli`` module.
"""

import logging

__all__ = ["__version__"]

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
