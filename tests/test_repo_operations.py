import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from infrastructure.repo import load_template, parse_origin_url
from infrastructure.repo import changes as changes_module
from infrastructure.repo.operations import DIFF_TRUNCATION_MARKER, GitCommandError, truncate_diff


DIFF = "diff --git a/src/app.py b/src/app.py\n@@ -1 +1,2 @@\n x\n+y"


class OriginUrlTests(unittest.TestCase):
    def test_https_and_ssh_urls_are_parsed(self) -> None:
        self.assertEqual(parse_origin_url("https://github.com/acme/shop.git\n"), ("acme", "shop"))
        self.assertEqual(parse_origin_url("git@github.com:acme/shop-api.git"), ("acme", "shop-api"))
        self.assertEqual(parse_origin_url("https://github.com/acme/shop"), ("acme", "shop"))
        self.assertIsNone(parse_origin_url("https://gitlab.com/acme/shop.git"))


class TruncateDiffTests(unittest.TestCase):
    def test_long_diffs_are_cut_with_marker(self) -> None:
        diff = "\n".join(f"+{index}" for index in range(1500))

        truncated = truncate_diff(diff)

        self.assertTrue(truncated.endswith(DIFF_TRUNCATION_MARKER))
        self.assertEqual(len(truncated.split("\n")), 1000 + 2)

    def test_short_diffs_are_untouched(self) -> None:
        self.assertEqual(truncate_diff(DIFF), DIFF)


class TemplateLookupTests(unittest.TestCase):
    def test_first_existing_template_wins(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_directory:
            repo_dir = Path(tmp_directory)
            (repo_dir / ".github" / "PULL_REQUEST_TEMPLATE").mkdir(parents=True)
            (repo_dir / ".github" / "PULL_REQUEST_TEMPLATE" / "feature.md").write_text("## Feature", encoding="utf-8")
            (repo_dir / "PULL_REQUEST_TEMPLATE.md").write_text("## Root", encoding="utf-8")

            template = load_template(repo_dir)

        self.assertEqual(template.name, "PULL_REQUEST_TEMPLATE.md")
        self.assertEqual(template.content, "## Root")

    def test_template_directory_is_searched_last(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_directory:
            repo_dir = Path(tmp_directory)
            (repo_dir / ".github" / "PULL_REQUEST_TEMPLATE").mkdir(parents=True)
            (repo_dir / ".github" / "PULL_REQUEST_TEMPLATE" / "feature.md").write_text("## Feature", encoding="utf-8")

            template = load_template(repo_dir)

        self.assertEqual(template.content, "## Feature")

    def test_missing_template_is_not_an_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_directory:
            self.assertIsNone(load_template(Path(tmp_directory)))


class CollectChangesTests(unittest.TestCase):
    def _patch(self, **overrides):
        values = {
            "current_branch": lambda _: "feature/PROJ-1",
            "branch_exists": lambda *_: True,
            "has_uncommitted_changes": lambda _: False,
            "branch_diff": lambda *_: DIFF,
            "diff_numstat": lambda *_: "1\t0\tsrc/app.py\n",
            "commit_subjects": lambda *_: ("feat: y",),
            "repo_link": lambda *_: None,
        }
        values.update(overrides)
        return patch.multiple(changes_module, **values)

    def test_snapshot_is_built_from_git_output(self) -> None:
        with self._patch():
            snapshot = changes_module.collect_changes("main", Path("."))

        self.assertEqual(snapshot.branch, "feature/PROJ-1")
        self.assertEqual(snapshot.diff_text, DIFF)
        self.assertEqual(snapshot.change_set.total_insertions, 1)
        self.assertEqual(snapshot.change_set.files[0].line_numbers.added, (2,))
        self.assertEqual(snapshot.change_set.commits, ("feat: y",))

    def test_base_branch_cannot_be_current_branch(self) -> None:
        with self._patch(current_branch=lambda _: "main"):
            with self.assertRaises(GitCommandError) as raised_error:
                changes_module.collect_changes("main", Path("."))

        self.assertIn("Cannot compare branch with itself", str(raised_error.exception))

    def test_unknown_base_branch_is_reported(self) -> None:
        with self._patch(branch_exists=lambda *_: False):
            with self.assertRaises(GitCommandError):
                changes_module.collect_changes("develop", Path("."))


if __name__ == "__main__":
    unittest.main()
