"""
Tests for CLI entry points.

These tests focus on:
- Argument validation (bad identifiers / campuses exit non-zero before any
  request is made)
- Dispatch to the query API, with the API patched out
"""

import io
import json
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from kentcourses.cli import main
from kentcourses.model import Course, CourseAttributes, RateMyProfessorReport, RateMyProfessorResponse


def sample_course() -> Course:
    return Course(
        name="CS10051",
        catalog_name="COMPUTER SCIENCE I",
        catalog_number="10051",
        grading="Standard Letter",
        credits="4",
        prerequisites="MATH 11010.",
        description="Intro.",
        attributes=CourseAttributes(),
        sections=[],
        professors=[],
    )


def run(argv):
    """Run main() and return (exit code, stdout)."""
    out = io.StringIO()
    with redirect_stdout(out):
        try:
            main(argv)
        except SystemExit as exc:
            return exc.code, out.getvalue()
    return None, out.getvalue()


class TestCLI(unittest.TestCase):
    @patch("kentcourses.cli.search_course")
    def test_invalid_identifier(self, search) -> None:
        code, out = run(["course", "1000CS"])
        self.assertNotEqual(code, 0)
        self.assertIn("Invalid course identifier", out)
        search.assert_not_called()

    @patch("kentcourses.cli.search_course")
    def test_invalid_campus(self, search) -> None:
        code, _ = run(["course", "CS10051", "--campus", "storrs"])
        self.assertNotEqual(code, 0)
        search.assert_not_called()

    @patch("kentcourses.cli.search_course")
    def test_course_json(self, search) -> None:
        search.return_value = sample_course()
        code, out = run(["course", "CS10051", "--mappings", "--no-sections", "--json"])

        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual(data["name"], "CS10051")
        self.assertIsInstance(data["last_data_marker"], str)

        _, kwargs = search.call_args
        self.assertTrue(kwargs["use_mappings"])
        self.assertEqual(kwargs["include"], [])

    @patch("kentcourses.cli.search_course", return_value=None)
    def test_course_without_data(self, search) -> None:
        code, out = run(["course", "CS10051"])
        self.assertEqual(code, 1)
        self.assertIn("No data for CS10051", out)

    @patch("kentcourses.cli.search_rmp")
    def test_rmp(self, search) -> None:
        search.return_value = RateMyProfessorResponse(name="Ada Lovelace", rmp_ids=["1", "2"])
        code, out = run(["rmp", "Ada Lovelace", "--strategy", "mapping"])
        self.assertEqual(code, 0)
        self.assertIn("Ada Lovelace: 1, 2", out)
        search.assert_called_once_with("Ada Lovelace", "any", strategy="mapping")

    @patch("kentcourses.cli.get_rmp_report")
    def test_report(self, report) -> None:
        report.return_value = RateMyProfessorReport(
            name="Ada Lovelace", average=4.5, ratings=10, take_again=90.0, difficulty=2.0, tags=["Caring"]
        )
        code, out = run(["report", "123"])
        self.assertEqual(code, 0)
        self.assertIn("4.5 (10 ratings)", out)
        self.assertIn("Caring", out)

    def test_unknown_command(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            with redirect_stdout(io.StringIO()), patch("sys.stderr", io.StringIO()):
                main(["nope"])
        self.assertNotEqual(ctx.exception.code, 0)


if __name__ == "__main__":
    unittest.main()
