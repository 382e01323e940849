import unittest

from domain.diff import build_change_set, parse_numstat
from domain.fallback import MAX_PR_TITLE_LENGTH, generate_fallback_description
from domain.models import OFFLINE_SOURCE, PromptContext, PullRequestTemplate, Ticket


DIFF = "\n".join(
    [
        "diff --git a/src/cart.py b/src/cart.py",
        "@@ -1,1 +1,12 @@",
        "-total = 0",
        *[f"+line {index}" for index in range(12)],
    ]
)


def _context(**overrides) -> PromptContext:
    ticket = Ticket(
        key="SHOP-7",
        summary="Fix cart totals.",
        description="Totals are rounded twice.",
        issue_type="Bug",
        status="Open",
        assignee="Rui",
        reporter="Ana",
    )
    values = {
        "ticket": ticket,
        "change_set": build_change_set(parse_numstat("12\t1\tsrc/cart.py"), DIFF, ["fix: rounding"]),
    }
    values.update(overrides)
    return PromptContext(**values)


class FallbackDescriptionTests(unittest.TestCase):
    def test_default_layout_lists_files_and_commits(self) -> None:
        content = generate_fallback_description(_context())

        self.assertEqual(content.title, "SHOP-7: Fix cart totals.")
        self.assertEqual(content.source, OFFLINE_SOURCE)
        self.assertIn("## Summary", content.body)
        self.assertIn("#### `src/cart.py` (modified)", content.body)
        self.assertIn("- **Added lines:** 1, 2, 3, 4, 5, 6, 7, 8, 9, 10 (and 2 more)", content.body)
        self.assertIn("- **Removed lines:** 1", content.body)
        self.assertIn("## Commit History", content.body)
        self.assertIn("- fix: rounding", content.body)
        self.assertIn("## Key Implementation Areas", content.body)

    def test_summary_describes_change_statistics(self) -> None:
        content = generate_fallback_description(_context())

        self.assertEqual(
            content.summary,
            "Fix cart totals. This change touches 1 file(s) with 12 insertion(s) and 1 deletion(s).",
        )

    def test_template_placeholders_are_filled(self) -> None:
        template = PullRequestTemplate(
            name="pull_request_template.md",
            content="Ticket: {{ticket}}\nWhy: {{Description}}\nWhat: {{summary}}",
        )

        content = generate_fallback_description(_context(template=template))

        self.assertIn("Ticket: SHOP-7", content.body)
        self.assertIn("Why: Totals are rounded twice.", content.body)
        self.assertIn("What: Fix cart totals. This change touches", content.body)
        self.assertNotIn("#### `src/cart.py`", content.body)

    def test_ticket_link_uses_base_url(self) -> None:
        content = generate_fallback_description(_context(), ticket_base_url="https://acme.atlassian.net/")

        self.assertTrue(content.body.startswith("[SHOP-7](https://acme.atlassian.net/browse/SHOP-7)"))

    def test_requested_title_wins_and_is_capped(self) -> None:
        content = generate_fallback_description(_context(pr_title="T" * 300))

        self.assertEqual(content.title, "T" * MAX_PR_TITLE_LENGTH)

    def test_output_is_deterministic(self) -> None:
        self.assertEqual(generate_fallback_description(_context()), generate_fallback_description(_context()))


if __name__ == "__main__":
    unittest.main()
