"""
Command line interface for the release_changelog tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``build-change-log`` command. It orchestrates
repository detection, configuration loading, release branch
resolution, changelog generation and, when requested, publishing the
update on a dedicated changelog branch.

Overriding defaults::

    build-change-log -r 46.7.0     # document an explicit release
    build-change-log -v            # echo every git query and result
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List, Optional, Tuple

import click

from release_changelog import __version__
from release_changelog.changelog.branches import (
    ReleaseBranchError,
    changelog_branch_name,
    list_release_branches,
    resolve_current_branch,
    resolve_previous_branch,
)
from release_changelog.changelog.generator import get_changelog_text
from release_changelog.changelog.renderer import write_changelog
from release_changelog.config.loader import ChangelogConfig, ConfigError, load_config
from release_changelog.vcs.git_client import GitClient, GitError

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_NO_REPO = 3
EXIT_INVALID_RELEASE = 4
EXIT_NO_PREVIOUS_RELEASE = 5
EXIT_CONFIG_ERROR = 6
EXIT_VCS_FAILURE = 7


# ---------------------------------------------------------------------------
# Progress and status display utilities
# ---------------------------------------------------------------------------

class ProgressIndicator:
    """Simple progress indicator for user feedback."""

    def __init__(self, message: str):
        self.message = message
        self.start_time = None

    def __enter__(self):
        self.start_time = time.time()
        click.echo(f"→ {self.message}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            elapsed = time.time() - self.start_time
            click.echo(f"  ✓ Done ({elapsed:.1f}s)")
        return False


def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}")


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}")


def print_warning(message: str, indent: int = 0):
    """Print a warning message."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}")


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


NEXT_STEPS: List[str] = [
    "1) Remove entries that shouldn't be included in the release.",
    "2) Add documentation links as needed.",
    "   Format: [Doc Title](https://forcedotcom.github.io/salesforcedx-vscode/articles/doc-link-here)",
    "3) Move entries to the 'Added' or 'Fixed' section header.",
    "4) Commit, push, and open your PR for team review.",
]


def print_next_steps(changelog_path: Path) -> None:
    click.echo(f"\nChange log written to: {changelog_path}\n")
    click.echo("Next Steps:")
    for step in NEXT_STEPS:
        click.echo(f"  {step}")


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def find_repo(start_dir: Path) -> Path:
    """Return the Git repository root containing ``start_dir``.

    Raises
    ------
    SystemExit
        With code EXIT_NO_REPO if no repository is found.
    """
    repo_root = GitClient.find_repo_root(start_dir)
    if repo_root is None:
        print_error("No Git repository found in current directory or parent directories.")
        raise SystemExit(EXIT_NO_REPO)
    return repo_root


def resolve_releases(
    client: GitClient,
    config: ChangelogConfig,
    release: Optional[str],
) -> Tuple[str, str]:
    """Resolve the current and previous release branches.

    Returns
    -------
    Tuple[str, str]
        ``(current_branch, previous_branch)``.

    Raises
    ------
    SystemExit
        With code EXIT_INVALID_RELEASE if the current release cannot be
        determined, or EXIT_NO_PREVIOUS_RELEASE if no earlier release
        branch exists.
    """
    try:
        with ProgressIndicator("Retrieving release branches"):
            branches = list_release_branches(client, config)
        current = resolve_current_branch(branches, config, release)
    except ReleaseBranchError as exc:
        print_error(f"{exc} Exiting.")
        raise SystemExit(EXIT_INVALID_RELEASE)

    try:
        previous = resolve_previous_branch(current, branches)
    except ReleaseBranchError as exc:
        print_error(f"{exc} Exiting.")
        raise SystemExit(EXIT_NO_PREVIOUS_RELEASE)
    return current, previous


def prepare_changelog_branch(client: GitClient, config: ChangelogConfig, release_branch: str) -> str:
    """Check out the branch the changelog update is committed on.

    The release branch is fetched first. An existing changelog branch is
    reused so that reruns append to it.
    """
    branch = changelog_branch_name(release_branch, config)
    local_release = release_branch
    remote_prefix = f"{config.remote}/"
    if local_release.startswith(remote_prefix):
        local_release = local_release[len(remote_prefix):]
    with ProgressIndicator(f"Preparing changelog branch '{branch}'"):
        client.fetch(config.remote, local_release)
        created = client.checkout_branch(branch, release_branch)
    print_success(f"{'Created' if created else 'Switched to'} branch: {branch}")
    return branch


def publish_changelog(client: GitClient, config: ChangelogConfig, release_branch: str) -> str:
    """Commit and push the changelog update, returning the pull request summary.

    The changelog is staged explicitly since it may not be tracked yet.
    """
    branch = changelog_branch_name(release_branch, config)
    with ProgressIndicator(f"Publishing '{branch}'"):
        client.stage_files([config.changelog_path])
        client.commit_all(f"Auto-Generated CHANGELOG for {release_branch}")
        client.push(config.remote, branch)
        summary = client.request_pull(release_branch, config.remote, branch)
    return summary


@click.command()
@click.option("-r", "--release", metavar="VERSION", help="Release to document (e.g. 46.7.0) instead of the latest release branch.")
@click.option("-v", "--verbose", is_flag=True, help="Echo every git query and intermediate result.")
@click.option("--publish", is_flag=True, help="Commit the update on a changelog branch, push it and print a pull request summary.")
@click.version_option(version=__version__, prog_name="build-change-log")
def main(release: Optional[str], verbose: bool, publish: bool) -> None:
    """Build the changelog section for a release branch.

    Commits unique to the release are grouped by sub-package and
    prepended to the changelog for manual review.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    click.echo("Starting script 'build-change-log'\n")
    ctx = click.get_current_context(silent=True)

    try:
        try:
            repo_root = find_repo(Path.cwd())
            config = load_config(repo_root)
        except SystemExit as exc:
            raise click.exceptions.Exit(exc.code)
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

        client = GitClient(repo_root)
        try:
            current, previous = resolve_releases(client, config, release)
        except SystemExit as exc:
            raise click.exceptions.Exit(exc.code)

        click.echo(f"Current Release Branch: {current}\nPrevious Release Branch: {previous}\n")

        changelog_path = repo_root / config.changelog_path
        try:
            if publish:
                prepare_changelog_branch(client, config, current)

            if not changelog_path.exists():
                print_warning(f"Changelog not found at {changelog_path}; it will be created.")

            with ProgressIndicator("Collecting commits unique to the release"):
                text = get_changelog_text(client, current, previous, config, changelog_path)

            if not text:
                print_info("Change results were empty.")
                raise click.exceptions.Exit(EXIT_SUCCESS)

            write_changelog(changelog_path, text)

            if publish:
                click.echo(publish_changelog(client, config, current))
        except GitError as exc:
            print_error(f"Git error: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        print_next_steps(changelog_path)
        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
