#!/usr/bin/env python
"""
Thin wrapper script to invoke the release_changelog CLI.

Running ``python build_change_log.py`` is equivalent to running the
``build-change-log`` console script installed via ``pyproject.toml``.
"""

from release_changelog.cli import main


if __name__ == "__main__":
    main(prog_name="build-change-log")
