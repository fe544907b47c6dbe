import unittest

from fakes import DummyGitClient

from release_changelog.changelog.models import CommitRecord
from release_changelog.changelog.parser import (
    collapse_packages,
    filter_existing_pr_entries,
    get_package_headers,
    get_package_name,
    parse_commit_line,
    parse_commits,
)
from release_changelog.config.loader import ChangelogConfig


CORE = "salesforcedx-vscode-core"


class TestGetPackageName(unittest.TestCase):
    def test_package_name_cases(self) -> None:
        config = ChangelogConfig()
        cases = [
            ("packages/salesforcedx-vscode-core/src/foo.ts", CORE),
            ("packages/salesforcedx-vscode-apex/package.json", "salesforcedx-vscode-apex"),
            ("docs/_articles/en/apex.md", "docs"),
            ("packages/salesforcedx-vscode-core/test/unit/foo.test.ts", None),
            ("packages/salesforcedx-vscode-core/images/icon.png", None),
            ("packages/system-tests/scenarios/foo.ts", None),
            ("scripts/change-log-generator.js", None),
            ("docsite/index.md", None),
            ("", None),
        ]
        for path, expected in cases:
            with self.subTest(path=path):
                self.assertEqual(get_package_name(path, config), expected)


class TestCollapsePackages(unittest.TestCase):
    def test_core_subsumes_leaf_packages_but_keeps_docs(self) -> None:
        config = ChangelogConfig()
        packages = ("salesforcedx-vscode-apex", CORE, "docs", "salesforcedx-vscode-lwc")
        self.assertEqual(collapse_packages(packages, config), (CORE, "docs"))

    def test_without_core_nothing_changes(self) -> None:
        config = ChangelogConfig()
        packages = ("salesforcedx-vscode-apex", "salesforcedx-vscode-lwc")
        self.assertEqual(collapse_packages(packages, config), packages)

    def test_headers_are_unique_and_ordered(self) -> None:
        files = [
            "packages/salesforcedx-vscode-lwc/a.ts",
            "packages/salesforcedx-vscode-apex/b.ts",
            "packages/salesforcedx-vscode-lwc/c.ts",
        ]
        self.assertEqual(
            get_package_headers(files, ChangelogConfig()),
            ("salesforcedx-vscode-lwc", "salesforcedx-vscode-apex"),
        )


class TestParseCommitLine(unittest.TestCase):
    def setUp(self) -> None:
        self.config = ChangelogConfig()
        self.client = DummyGitClient()
        self.client.files = {"a1b2c3d": ["packages/salesforcedx-vscode-core/src/foo.ts"]}

    def test_parses_pr_commit(self) -> None:
        record = parse_commit_line("a1b2c3d Fix null pointer (#123)", self.client, self.config)
        self.assertEqual(
            record,
            CommitRecord(
                pr_number=123,
                commit_id="a1b2c3d",
                message="Fix null pointer",
                files_changed=("packages/salesforcedx-vscode-core/src/foo.ts",),
                packages=(CORE,),
            ),
        )
        self.assertEqual(self.client.calls, [("show", "a1b2c3d")])

    def test_message_excludes_hash_and_pr_suffix(self) -> None:
        record = parse_commit_line("a1b2c3d   Support (nested) parens (#45)  ", self.client, self.config)
        self.assertEqual(record.message, "Support (nested) parens")
        self.assertNotIn("(#45)", record.message)
        self.assertNotIn("a1b2c3d", record.message)

    def test_commits_without_pr_are_skipped(self) -> None:
        for line in ["a1b2c3d Bump version", "a1b2c3d Fix (#12) later text", "", "   "]:
            with self.subTest(line=line):
                self.assertIsNone(parse_commit_line(line, self.client, self.config))
        self.assertEqual(self.client.calls, [])

    def test_empty_file_list_yields_no_packages(self) -> None:
        record = parse_commit_line("ffff000 Merge branch (#7)", self.client, self.config)
        self.assertEqual(record.files_changed, ())
        self.assertEqual(record.packages, ())


class TestFilterExistingEntries(unittest.TestCase):
    def test_drops_prs_already_in_changelog(self) -> None:
        records = [
            CommitRecord(pr_number=123, commit_id="a", message="one"),
            CommitRecord(pr_number=124, commit_id="b", message="two"),
        ]
        changelog = "- one ([PR #123](https://github.com/forcedotcom/salesforcedx-vscode/pull/123))\n"
        self.assertEqual(filter_existing_pr_entries(records, changelog), [records[1]])

    def test_parse_commits_skips_and_filters(self) -> None:
        client = DummyGitClient()
        client.files = {
            "a1b2c3d": ["packages/salesforcedx-vscode-apex/src/a.ts"],
            "b2c3d4e": ["packages/salesforcedx-vscode-lwc/src/b.ts"],
        }
        commits = [
            "a1b2c3d Add apex thing (#10)",
            "c3d4e5f Release 17.10.0",
            "b2c3d4e Fix lwc thing (#11)",
        ]
        records = parse_commits(commits, client, ChangelogConfig(), "Already has PR #10")
        self.assertEqual([r.pr_number for r in records], [11])


if __name__ == "__main__":
    unittest.main()
