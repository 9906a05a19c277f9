"""
Unit tests for the lookup tables.

Every lookup is total: unknown input maps to an explicit UNKNOWN member.
"""

import unittest

from kentcourses.constants import (
    Building,
    Campus,
    ContentArea,
    GradingType,
    RmpCampus,
    describe_session,
    describe_term,
)


class TestCampus(unittest.TestCase):
    def test_known_code(self) -> None:
        self.assertEqual(Campus.from_code("KC").value, "Kent")
        self.assertEqual(Campus.from_code(" el ").value, "East Liverpool")

    def test_unknown_code(self) -> None:
        self.assertEqual(Campus.from_code("ZZ").value, "Unknown")
        self.assertIs(Campus.from_code(""), Campus.UNKNOWN)

    def test_slug(self) -> None:
        self.assertEqual(Campus.EAST_LIVERPOOL.slug, "east_liverpool")


class TestRmpCampus(unittest.TestCase):
    def test_campus_lookup(self) -> None:
        self.assertEqual(RmpCampus.for_campus("stark").value, "U2Nob29sLTQyNjg=")

    def test_ashtabula_shares_east_liverpool_id(self) -> None:
        self.assertEqual(RmpCampus.for_campus("ashtabula").value, RmpCampus.EAST_LIVERPOOL.value)

    def test_any_uses_main_campus(self) -> None:
        self.assertIs(RmpCampus.for_campus("any"), RmpCampus.KENT)


class TestOtherTables(unittest.TestCase):
    def test_building(self) -> None:
        self.assertEqual(Building.from_code("msb").value, "Mathematical Sciences Building")
        self.assertIs(Building.from_code("XYZ"), Building.UNKNOWN)

    def test_content_area(self) -> None:
        self.assertIs(ContentArea.from_name("Kent Core Social Sciences"), ContentArea.SOCIAL_SCIENCES)
        self.assertIs(ContentArea.from_name("Something Else"), ContentArea.UNKNOWN)

    def test_grading(self) -> None:
        self.assertIs(GradingType.from_text("Standard Letter-IP"), GradingType.GRADED)
        self.assertIs(GradingType.from_text(""), GradingType.UNKNOWN)

    def test_terms(self) -> None:
        self.assertEqual(describe_term("202380"), "Fall 2023")
        self.assertEqual(describe_term("202410"), "Spring 2024")
        self.assertEqual(describe_term("202399"), "202399")

    def test_sessions(self) -> None:
        self.assertEqual(describe_session("1"), "Full Semester")
        self.assertEqual(describe_session("7W"), "Session 7W")
        self.assertEqual(describe_session(""), "")


if __name__ == "__main__":
    unittest.main()
