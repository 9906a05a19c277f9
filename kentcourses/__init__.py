"""
kentcourses: Kent State course catalog + RateMyProfessors scraper.
"""

from kentcourses.rmp import get_rmp_report, search_rmp
from kentcourses.search import (
    DEFAULT_SEARCH_PARTS,
    SearchPart,
    get_enrollment,
    is_campus_type,
    search_by_section,
    search_course,
)
from kentcourses.validate import is_course_identifier, is_section_identifier

__all__ = [
    "DEFAULT_SEARCH_PARTS",
    "SearchPart",
    "get_enrollment",
    "get_rmp_report",
    "is_campus_type",
    "is_course_identifier",
    "is_section_identifier",
    "search_by_section",
    "search_course",
    "search_rmp",
]
