"""
Configuration loader for release_changelog.

Every setting has a default matching the Salesforce DX VS Code
repository layout, so the tool runs without any configuration file.
A repository may override individual settings with a JSON file named
``.changelog_config.json`` located in its root directory.

If the file is malformed or holds values of the wrong type, a
:class:`ConfigError` is raised.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


CONFIG_FILE_NAME = ".changelog_config.json"


class ConfigError(Exception):
    """Raised when the changelog configuration file is invalid."""

    pass


@dataclass(frozen=True)
class ChangelogConfig:
    """Settings shared by every stage of the changelog generator.

    Attributes
    ----------
    release_branch_prefix : str
        Prefix of remote release branches; the version follows it.
    changelog_path : str
        Repository-relative path of the Markdown changelog.
    changelog_branch_prefix : str
        Prefix of the local branch the changelog update is committed to.
    remote : str
        Remote that release branches are fetched from and pushed to.
    pr_url_template : str
        Pull request URL with a ``{pr}`` placeholder for the number.
    package_prefix : str
        Sub-package directories starting with this prefix are attributed.
    core_package : str
        Package whose changes subsume sibling package attributions.
    docs_package : str
        Documentation directory, always attributed on its own.
    """

    release_branch_prefix: str = "origin/release/v"
    changelog_path: str = "packages/salesforcedx-vscode/CHANGELOG.md"
    changelog_branch_prefix: str = "changeLog-v"
    remote: str = "origin"
    pr_url_template: str = "https://github.com/forcedotcom/salesforcedx-vscode/pull/{pr}"
    package_prefix: str = "salesforce"
    core_package: str = "salesforcedx-vscode-core"
    docs_package: str = "docs"


def load_config(repo_root: Path) -> ChangelogConfig:
    """Load the changelog configuration for the repository at ``repo_root``.

    Args:
        repo_root: Root directory of the Git repository.

    Returns:
        A :class:`ChangelogConfig` with defaults replaced by any values
        found in ``.changelog_config.json``.

    Raises:
        ConfigError: If the file is not valid JSON, is not a JSON object,
            or holds a non-string value for a known setting.
    """
    config_path = repo_root / CONFIG_FILE_NAME
    if not config_path.exists():
        logger.debug("No %s found in %s; using defaults", CONFIG_FILE_NAME, repo_root)
        return ChangelogConfig()

    try:
        content = config_path.read_text(encoding="utf-8")
        data: Dict[str, Any] = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain a JSON object")

    known = {f.name for f in dataclasses.fields(ChangelogConfig)}
    overrides: Dict[str, str] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown configuration key '%s'", key)
            continue
        if not isinstance(value, str):
            raise ConfigError(f"'{key}' must be a string")
        overrides[key] = value

    if "pr_url_template" in overrides and "{pr}" not in overrides["pr_url_template"]:
        raise ConfigError("'pr_url_template' must contain a '{pr}' placeholder")

    config = dataclasses.replace(ChangelogConfig(), **overrides)
    logger.debug("Loaded changelog configuration from: %s", config_path)
    logger.debug("Configuration data: %s", config)
    return config
