"""
Public query API.

    search_course("CS10051")              course + sections + professors
    search_course("CS10051", "stark")     only sections taught at Stark
    search_course("CS10051", use_mappings=True)
                                          bundled metadata, no network
    search_by_section("CS10051", "001")   one section of a course
    get_enrollment("202380", "12345", "001")

Everything runs sequentially: one request finishes before the next starts,
term codes are crawled one after another in config.TERMS order.

Failures never raise. Invalid input and unreachable pages both end up as
None (or as empty section / professor lists).
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional, Sequence

from kentcourses import config
from kentcourses.constants import CAMPUS_TYPES
from kentcourses.mappings import find_course_mapping
from kentcourses.model import Course, CourseAttributes, EnrollmentPayload, Section, SectionPayload
from kentcourses.parse import (
    DEFAULT_DESC,
    DEFAULT_GRADING,
    build_professors,
    default_prerequisites,
    filter_by_campus,
    normalize_credits,
    parse_course_block,
    parse_enrollment,
    parse_sections,
)
from kentcourses.rmp import lookup_rmp_ids
from kentcourses.scrape import fetch_course_page, fetch_enrollment_page, fetch_sections_page
from kentcourses.validate import is_section_identifier, split_identifier


logger = logging.getLogger(__name__)


class SearchPart(Enum):
    SECTIONS = "sections"
    PROFESSORS = "professors"


DEFAULT_SEARCH_PARTS = (SearchPart.SECTIONS, SearchPart.PROFESSORS)


def is_campus_type(value: str) -> bool:
    return (value or "").strip().lower() in CAMPUS_TYPES


def mapping_data_marker(now: Optional[datetime] = None) -> datetime:
    """
    Freshness marker of the bundled mappings: midnight today, or 18:00 of
    the previous day before the nightly 06:00 refresh.
    """
    now = now or datetime.now()
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if now.hour < 6:
        return midnight - timedelta(hours=6)
    return midnight


def _course_from_mapping(entry: dict, marker: datetime) -> Course:
    attributes = entry.get("attributes") or {}
    return Course(
        name=entry["name"],
        catalog_name=entry.get("catalog_name", ""),
        catalog_number=entry.get("catalog_number", ""),
        grading=entry.get("grading") or DEFAULT_GRADING,
        credits=normalize_credits(str(entry.get("credits", ""))),
        prerequisites=default_prerequisites(entry.get("prerequisites")),
        description=entry.get("description") or DEFAULT_DESC,
        attributes=CourseAttributes(
            lab=bool(attributes.get("lab")),
            writing=bool(attributes.get("writing")),
            quantitative=bool(attributes.get("quantitative")),
            diversity=bool(attributes.get("diversity")),
            experiential=bool(attributes.get("experiential")),
            graduate=bool(attributes.get("graduate")),
            content_areas=list(attributes.get("content_areas") or []),
        ),
        sections=[],
        professors=[],
        last_data_marker=marker,
    )


def _collect_sections(prefix: str, number: str, terms: Sequence[str]) -> List[Section]:
    sections: List[Section] = []
    for term in terms:
        html = fetch_sections_page(prefix, number, term)
        if html is None:
            continue
        sections.extend(parse_sections(html, term))
    return sections


def search_course(
    identifier: str,
    campus: str = "any",
    use_mappings: bool = False,
    include: Sequence[SearchPart] = DEFAULT_SEARCH_PARTS,
    marker: Optional[datetime] = None,
) -> Optional[Course]:
    """
    Attempts to retrieve a course with its sections and professors.

    With use_mappings the bundled table is consulted first; a hit returns
    base metadata only (sections and professors are always empty), stamped
    with marker or mapping_data_marker(). A miss falls back to the live
    catalog, again without sections or professors.

    Professors are only looked up when sections are included as well.
    """
    parts = split_identifier(identifier)
    if parts is None:
        logger.debug("Rejected course identifier %r", identifier)
        return None
    prefix, number = parts

    if use_mappings:
        entry = find_course_mapping(f"{prefix}{number}")
        if entry is not None:
            return _course_from_mapping(entry, marker or mapping_data_marker())
        return search_course(identifier, campus, use_mappings=False, include=(), marker=marker)

    html = fetch_course_page(prefix, number)
    if html is None:
        return None

    course = parse_course_block(html, prefix, number, marker=marker)
    if course is None:
        logger.info("%s%s is not listed in the catalog", prefix, number)
        return None

    if SearchPart.SECTIONS not in include:
        return course

    sections = filter_by_campus(_collect_sections(prefix, number, config.TERMS), campus)
    course.sections = sections

    if SearchPart.PROFESSORS in include:
        course.professors = build_professors(sections, lambda name: lookup_rmp_ids(name, campus))

    return course


def search_by_section(identifier: str, section: str) -> Optional[SectionPayload]:
    """
    Attempts to retrieve one section of a course, matched case-insensitively
    on the section code.
    """
    if not is_section_identifier((section or "").upper()):
        return None

    course = search_course(identifier, "any", include=(SearchPart.SECTIONS,))
    if course is None:
        return None

    wanted = section.lower()
    data = next((s for s in course.sections if s.section.lower() == wanted), None)
    if data is None:
        return None

    return SectionPayload(
        name=course.name,
        grading=course.grading,
        credits=course.credits,
        prerequisites=course.prerequisites,
        description=course.description,
        section=data,
        last_data_marker=course.last_data_marker,
    )


def get_enrollment(term: str, class_number: str, section: str) -> Optional[EnrollmentPayload]:
    """
    Attempts to read the seat counts of one section from Banner.
    """
    html = fetch_enrollment_page(term, class_number)
    if html is None:
        return None
    return parse_enrollment(html, term, class_number, section)
