import unittest

from fakes import DummyGitClient

from release_changelog.changelog.branches import (
    ReleaseBranchError,
    changelog_branch_name,
    list_release_branches,
    release_version,
    resolve_current_branch,
    resolve_previous_branch,
)
from release_changelog.config.loader import ChangelogConfig


BRANCHES = [
    "origin/release/v17.10.0",
    "origin/release/v17.9.1",
    "origin/release/v17.9.0",
]


class TestListReleaseBranches(unittest.TestCase):
    def test_keeps_matching_branches_in_order(self) -> None:
        client = DummyGitClient()
        client.branches = ["origin/release/v17.10.0", "origin/release/vnext", "origin/release/v17.9.1"]
        branches = list_release_branches(client, ChangelogConfig())
        self.assertEqual(branches, ["origin/release/v17.10.0", "origin/release/v17.9.1"])
        self.assertEqual(client.calls, [("branch", "origin/release/v*")])

    def test_no_parseable_branches_is_fatal(self) -> None:
        client = DummyGitClient()
        client.branches = ["origin/release/vnext"]
        with self.assertRaises(ReleaseBranchError):
            list_release_branches(client, ChangelogConfig())


class TestResolveCurrentBranch(unittest.TestCase):
    def test_defaults_to_newest_branch(self) -> None:
        self.assertEqual(resolve_current_branch(BRANCHES, ChangelogConfig()), "origin/release/v17.10.0")

    def test_override_is_prefixed(self) -> None:
        branch = resolve_current_branch(BRANCHES, ChangelogConfig(), "17.9.1")
        self.assertEqual(branch, "origin/release/v17.9.1")

    def test_invalid_override_is_fatal(self) -> None:
        with self.assertRaises(ReleaseBranchError) as ctx:
            resolve_current_branch(BRANCHES, ChangelogConfig(), "7.1")
        self.assertIn("Expected format [xx.yy.z]", str(ctx.exception))

    def test_empty_branch_list_is_fatal(self) -> None:
        with self.assertRaises(ReleaseBranchError):
            resolve_current_branch([], ChangelogConfig())


class TestResolvePreviousBranch(unittest.TestCase):
    def test_returns_next_older_branch(self) -> None:
        self.assertEqual(resolve_previous_branch("origin/release/v17.9.1", BRANCHES), "origin/release/v17.9.0")

    def test_oldest_branch_has_no_previous(self) -> None:
        with self.assertRaises(ReleaseBranchError):
            resolve_previous_branch("origin/release/v17.9.0", BRANCHES)

    def test_unknown_branch_has_no_previous(self) -> None:
        with self.assertRaises(ReleaseBranchError):
            resolve_previous_branch("origin/release/v18.0.0", BRANCHES)


class TestBranchNames(unittest.TestCase):
    def test_release_version_and_changelog_branch(self) -> None:
        config = ChangelogConfig()
        self.assertEqual(release_version("origin/release/v17.10.0", config), "17.10.0")
        self.assertEqual(changelog_branch_name("origin/release/v17.10.0", config), "changeLog-v17.10.0")


if __name__ == "__main__":
    unittest.main()
