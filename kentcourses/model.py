"""
Central data model definitions used across the project.

This module defines the canonical structure of the records produced by the
scraper so that:
- fetching, parsing and enrichment share the same field names
- every record can be turned into JSON with dataclasses.asdict()

Records are flat and never updated after construction. There is no identity
beyond string equality (a Professor is "the sections whose instructor string
equals this name").
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class Location:
    name: str
    url: Optional[str] = None


@dataclass
class Enrollment:
    """
    Seat counts of one section.

    max is always current + remaining, full iff nothing remains.
    """

    max: int
    current: int
    full: bool
    waitlist: Optional[int] = None

    @classmethod
    def from_counts(cls, current: int, remaining: int, waitlist: Optional[int] = None) -> "Enrollment":
        return cls(
            max=current + remaining,
            current=current,
            full=remaining == 0,
            waitlist=waitlist,
        )


@dataclass
class SectionInternal:
    """Banner identifiers needed to address a section in follow-up requests."""

    term_code: str
    class_number: str
    class_section: str
    session_code: str


@dataclass
class Section:
    """
    One scheduled offering of a course (term, instructor, meeting pattern).
    """

    internal: SectionInternal
    term: str
    mode: str
    campus: str
    instructor: str
    section: str
    session: str
    schedule: str
    location: List[Location]
    enrollment: Enrollment
    notes: str


@dataclass
class Professor:
    name: str
    sections: List[Section]
    rmp_ids: List[str]


@dataclass
class CourseAttributes:
    lab: bool = False
    writing: bool = False
    quantitative: bool = False
    diversity: bool = False
    experiential: bool = False
    graduate: bool = False
    content_areas: List[str] = field(default_factory=list)


@dataclass
class Course:
    """
    Represents one catalog course with its sections and professors.

    last_data_marker tells callers how fresh the data is; it is ignored when
    comparing two Course records.
    """

    name: str
    catalog_name: str
    catalog_number: str
    grading: str
    credits: str
    prerequisites: str
    description: str
    attributes: CourseAttributes
    sections: List[Section]
    professors: List[Professor]
    last_data_marker: datetime = field(compare=False, default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return _jsonable(asdict(self))


@dataclass
class SectionPayload:
    """Course metadata plus exactly one section."""

    name: str
    grading: str
    credits: str
    prerequisites: str
    description: str
    section: Section
    last_data_marker: datetime = field(compare=False, default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return _jsonable(asdict(self))


@dataclass
class RateMyProfessorResponse:
    name: str
    rmp_ids: List[str]


@dataclass
class RateMyProfessorReport:
    name: str
    average: float
    ratings: int
    take_again: float
    difficulty: float
    tags: List[str]


@dataclass
class EnrollmentPayload:
    course: Dict[str, str]
    available: int
    total: int
    overfill: bool
    percent: float


def _jsonable(value: Any) -> Any:
    """Recursively render datetimes as ISO strings so json.dumps() works."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    return value
