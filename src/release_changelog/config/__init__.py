"""
Configuration loading for release_changelog.

Provides the project defaults and an optional loader for a
``.changelog_config.json`` file in the repository root. See
:mod:`release_changelog.config.loader` for implementation details.
"""

from .loader import ChangelogConfig, ConfigError, load_config  # noqa: F401
