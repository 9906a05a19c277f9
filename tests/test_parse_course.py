"""
Tests for course metadata parsing (catalog page -> Course).

The fixture page lists two courses; only the requested one must be picked.
"""

import unittest
from datetime import datetime
from pathlib import Path

from kentcourses.parse import (
    DEFAULT_DESC,
    DEFAULT_PREREQS,
    clean_course_name,
    clean_credits,
    default_prerequisites,
    normalize_credits,
    parse_course_attributes,
    parse_course_block,
    parse_data_marker,
    read_attributes,
)


FIXTURES = Path(__file__).resolve().parent / "fixtures"
MARKER = datetime(2023, 8, 1, 12, 0, 0)


def course_page(body: str) -> str:
    return f'<html><body><div class="courseblock">{body}</div></body></html>'


class TestFieldHelpers(unittest.TestCase):
    def test_clean_credits(self) -> None:
        self.assertEqual(clean_credits("3.000 Credit Hours"), "3.000")
        self.assertEqual(clean_credits(""), "0")
        self.assertEqual(clean_credits("1-4 Credit Hours"), "1-4")

    def test_normalize_credits(self) -> None:
        self.assertEqual(normalize_credits("3.000 Credit Hours"), "3")
        self.assertEqual(normalize_credits("1.500"), "1.5")
        self.assertEqual(normalize_credits("4"), "4")
        self.assertEqual(normalize_credits(None), "0")

    def test_prerequisite_defaults(self) -> None:
        self.assertEqual(default_prerequisites(""), DEFAULT_PREREQS)
        self.assertEqual(default_prerequisites(None), DEFAULT_PREREQS)
        self.assertEqual(default_prerequisites("None."), DEFAULT_PREREQS)
        self.assertEqual(default_prerequisites("Prereq: None. Sophomore standing."), DEFAULT_PREREQS)
        self.assertEqual(default_prerequisites(" MATH 11010. "), "MATH 11010.")

    def test_clean_course_name(self) -> None:
        self.assertEqual(clean_course_name("COMPUTER SCIENCE I (ELR)"), "COMPUTER SCIENCE I")
        self.assertEqual(clean_course_name("SEMINAR (WIC) (DIVD)  ON X"), "SEMINAR ON X")

    def test_read_attributes(self) -> None:
        attrs = read_attributes(["Grade Mode: Standard Letter", "no colon here", "Attributes: A, B"])
        self.assertEqual(attrs, {"Grade Mode": "Standard Letter", "Attributes": "A, B"})

    def test_attribute_flags(self) -> None:
        attrs = parse_course_attributes(
            "Diversity Domestic, Kent Core Basic Sciences, Kent Core Basic Sciences Laboratory, "
            "Writing Intensive Course",
            "60001",
        )
        self.assertTrue(attrs.lab)
        self.assertTrue(attrs.writing)
        self.assertTrue(attrs.diversity)
        self.assertTrue(attrs.graduate)
        self.assertFalse(attrs.quantitative)
        self.assertEqual(attrs.content_areas, ["BASIC_SCIENCES"])

    def test_data_marker(self) -> None:
        parsed = parse_data_marker("19-OCT-23 06.15.30.123456 PM", MARKER)
        self.assertEqual(parsed, datetime(2023, 10, 19, 18, 15, 30))
        self.assertEqual(parse_data_marker("", MARKER), MARKER)
        self.assertEqual(parse_data_marker("yesterday", MARKER), MARKER)


class TestParseCourseBlock(unittest.TestCase):
    def setUp(self) -> None:
        self.html = (FIXTURES / "catalog_cs10051.html").read_text(encoding="utf-8")

    def test_full_course(self) -> None:
        course = parse_course_block(self.html, "CS", "10051", marker=MARKER)

        self.assertIsNotNone(course)
        assert course is not None

        self.assertEqual(course.name, "CS10051")
        self.assertEqual(course.catalog_name, "COMPUTER SCIENCE I")
        self.assertEqual(course.catalog_number, "10051")
        self.assertEqual(course.credits, "4")
        self.assertEqual(course.grading, "Standard Letter")
        self.assertEqual(course.prerequisites, "MATH 11010 or MATH 12002.")
        self.assertEqual(course.description, "Introduction to computer science and programming.")
        self.assertTrue(course.attributes.quantitative)
        self.assertTrue(course.attributes.experiential)
        self.assertFalse(course.attributes.lab)
        self.assertEqual(course.attributes.content_areas, ["MATHEMATICS"])
        self.assertEqual(course.sections, [])
        self.assertEqual(course.professors, [])
        self.assertEqual(course.last_data_marker, MARKER)

    def test_unlisted_course_returns_none(self) -> None:
        self.assertIsNone(parse_course_block(self.html, "CS", "99999", marker=MARKER))

    def test_shorter_number_does_not_match_longer_course(self) -> None:
        self.assertIsNone(parse_course_block(self.html, "CS", "1005", marker=MARKER))
        self.assertIsNone(parse_course_block(self.html, "CS", "100", marker=MARKER))

    def test_qualifier_is_part_of_the_course_number(self) -> None:
        html = course_page(
            '<p class="courseblocktitle">ENG&#160;21011W&#160;&#160;RESEARCH WRITING&#160;&#160;3 Credit Hours</p>'
            '<p class="courseblockdesc">Writing from sources.</p>'
        )
        self.assertIsNone(parse_course_block(html, "ENG", "21011", marker=MARKER))

        course = parse_course_block(html, "ENG", "21011W", marker=MARKER)
        assert course is not None
        self.assertEqual(course.name, "ENG21011W")
        self.assertEqual(course.catalog_number, "21011W")
        self.assertFalse(course.attributes.graduate)

    def test_parsing_twice_gives_equal_records(self) -> None:
        a = parse_course_block(self.html, "CS", "10051")
        b = parse_course_block(self.html, "CS", "10051")
        # markers differ (datetime.now()) but are excluded from equality
        self.assertEqual(a, b)

    def test_defaults_without_prerequisite_marker(self) -> None:
        html = course_page(
            '<p class="courseblocktitle">HIST&#160;11050&#160;&#160;WORLD HISTORY</p>'
            '<p class="courseblockdesc">  </p>'
        )
        course = parse_course_block(html, "HIST", "11050", marker=MARKER)

        self.assertIsNotNone(course)
        assert course is not None

        self.assertEqual(course.catalog_name, "WORLD HISTORY")
        self.assertEqual(course.credits, "0")
        self.assertEqual(course.grading, "Unavailable")
        self.assertEqual(course.prerequisites, DEFAULT_PREREQS)
        self.assertEqual(course.description, DEFAULT_DESC)

    def test_none_prerequisite_is_replaced(self) -> None:
        html = course_page(
            '<p class="courseblocktitle">ENG&#160;11011&#160;&#160;COLLEGE WRITING I&#160;&#160;3 Credit Hours</p>'
            '<p class="courseblockdesc">Practice in writing.</p>'
            '<p class="courseblockextra">Prerequisite: None.</p>'
            '<p class="courseblockextra">Grade Mode: Satisfactory/Unsatisfactory</p>'
        )
        course = parse_course_block(html, "ENG", "11011", marker=MARKER)

        self.assertIsNotNone(course)
        assert course is not None

        self.assertEqual(course.prerequisites, DEFAULT_PREREQS)
        self.assertEqual(course.description, "Practice in writing.")
        self.assertEqual(course.grading, "Satisfactory/Unsatisfactory")
        self.assertEqual(course.credits, "3")

    def test_refresh_marker_on_page_wins(self) -> None:
        html = self.html.replace(
            "<body>", '<body><span class="last-refresh">01-SEP-23 07.00.00.000000 AM</span>'
        )
        course = parse_course_block(html, "CS", "10051", marker=MARKER)
        assert course is not None
        self.assertEqual(course.last_data_marker, datetime(2023, 9, 1, 7, 0, 0))


if __name__ == "__main__":
    unittest.main()
