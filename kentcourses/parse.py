"""
Parsing (HTML -> structured records).

- Course metadata comes from the CourseLeaf catalog search page
  (div.courseblock)
- Sections come from the Banner class search result (table.datadisplaytable),
  one block of rows per section, blocks separated by delimiter rows
- Seat counts come from the Banner detail page (table with summary
  "seating numbers")

Important rules (DO NOT CHANGE):
- Column offsets below mirror the live Banner layout, nothing else
- Instructor identity is the cleaned name string, nothing smarter
- Parsing is best effort: missing optional fields fall back to defaults,
  a changed layout may still raise IndexError halfway through a course
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from kentcourses import config
from kentcourses.constants import Building, Campus, ContentArea, GradingType, describe_session, describe_term
from kentcourses.model import (
    Course,
    CourseAttributes,
    Enrollment,
    EnrollmentPayload,
    Location,
    Professor,
    Section,
    SectionInternal,
)
from kentcourses.tables import Grid, cell, clean_text, extract_grid, find_table, split_section_blocks


logger = logging.getLogger(__name__)


DEFAULT_PREREQS = "There are no prerequisites for this course."
DEFAULT_DESC = "There is no description provided for this course."
DEFAULT_GRADING = GradingType.UNKNOWN.value

PREREQ_MARKER = "Prerequisite:"
NONE_SENTINEL = "None."
NOTES_MARKER = "Notes:"
ONLINE_MARKER = "Web COURSE"
ONLINE_LOCATION = "Online"

# Banner class search columns (grid[row][column]).
COLUMNS: Dict[str, int] = {
    "select": 0,
    "crn": 1,
    "subject": 2,
    "course": 3,
    "section": 4,
    "credits": 5,
    "title": 6,
    "campus": 7,
    "session": 8,
    "mode": 9,
    "days": 10,
    "time": 11,
    "actual": 12,
    "remaining": 13,
    "waitlist": 14,
    "instructor": 15,
    "dates": 16,
    "location": 17,
}

_TITLE_SPLIT = re.compile(r"\s{2,}")
_PAREN_CODE = re.compile(r"\(\w+\)")
_PAREN_ANY = re.compile(r"\([^)]*\)")
_NON_NUMERIC = re.compile(r"[^\d.\-]")
_WS = re.compile(r"\s+")
_LAST_FIRST = re.compile(r"^([^,]+),\s*(.+)$")
_INT = re.compile(r"-?\d+")
_LOCATION = re.compile(r"^([A-Z]{2,4})\s+([\w-]+)$")
_LAB = re.compile(r"\bLab(oratory)?\b")
_REFRESH_MICROS = re.compile(r":\d{6}")


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def clean_credits(raw: str) -> str:
    """
    Strip everything but digits, dots and dashes.

    '3.000 Credit Hours' -> '3.000'; empty input -> '0'.
    """
    cleaned = _NON_NUMERIC.sub("", raw or "").strip(".-")
    return cleaned or "0"


def normalize_credits(raw: str) -> str:
    """
    Like clean_credits() but drops zero decimals: '3.000' -> '3',
    '1.500' -> '1.5'. Ranges ('1-4') are kept as they are.
    """
    cleaned = clean_credits(raw)
    if "-" in cleaned:
        return cleaned
    if "." in cleaned:
        cleaned = cleaned.rstrip("0").rstrip(".")
    return cleaned or "0"


def default_prerequisites(text: Optional[str]) -> str:
    text = (text or "").strip()
    if not text or NONE_SENTINEL in text:
        return DEFAULT_PREREQS
    return text


def default_description(text: Optional[str]) -> str:
    text = (text or "").strip()
    return text or DEFAULT_DESC


def clean_instructor(raw: str) -> str:
    """
    'Smith,  John (P)' -> 'John Smith'.

    Parenthetical annotations are removed, whitespace collapsed and a
    'Last, First' order swapped into 'First Last'.
    """
    name = _PAREN_ANY.sub("", raw or "")
    name = _WS.sub(" ", name).strip()
    return _LAST_FIRST.sub(r"\2 \1", name).strip()


def clean_course_name(raw: str) -> str:
    """'COMPUTER SCIENCE I (ELR)' -> 'COMPUTER SCIENCE I'."""
    return _WS.sub(" ", _PAREN_CODE.sub("", raw or "")).strip()


def _to_int(text: str, default: int = 0) -> int:
    m = _INT.search(text or "")
    return int(m.group(0)) if m else default


def read_attributes(lines: Iterable[str]) -> Dict[str, str]:
    """
    Turn 'Key: value' lines into a dict. Lines without ': ' are skipped.
    """
    out: Dict[str, str] = {}
    for line in lines:
        if ": " not in line:
            continue
        key, value = line.split(": ", 1)
        out[key.strip()] = value.strip()
    return out


def parse_course_attributes(attributes: str, catalog_number: str) -> CourseAttributes:
    """
    Derive attribute flags from the catalog 'Attributes:' line.
    """
    items = [x.strip() for x in (attributes or "").split(", ") if x.strip()]
    areas = [ContentArea.from_name(x) for x in items]
    areas = [a for a in areas if a is not ContentArea.UNKNOWN]

    joined = ", ".join(items)
    return CourseAttributes(
        lab=bool(_LAB.search(joined)),
        writing="Writing Intensive" in joined,
        quantitative=ContentArea.MATHEMATICS in areas,
        diversity="Diversity" in joined,
        experiential="Experiential Learning" in joined,
        graduate=_to_int(catalog_number) >= 50000,
        content_areas=[a.name for a in areas],
    )


def parse_data_marker(text: str, default: datetime) -> datetime:
    """
    Parse a Banner refresh stamp such as '19-OCT-26 06.15.30.123456 PM'.

    Returns default if the text is missing or cannot be parsed.
    """
    raw = (text or "").strip()
    if not raw:
        return default

    raw = _REFRESH_MICROS.sub("", raw.replace(".", ":"))
    try:
        return datetime.strptime(raw, "%d-%b-%y %I:%M:%S %p")
    except ValueError:
        logger.debug("Unparseable refresh marker: %r", text)
        return default


def describe_location(location: Location) -> str:
    """'MSB 228' -> 'MSB 228 (Mathematical Sciences Building)'."""
    m = _LOCATION.match(location.name)
    if not m:
        return location.name
    building = Building.from_code(m.group(1))
    if building is Building.UNKNOWN:
        return location.name
    return f"{location.name} ({building.value})"


# ---------------------------------------------------------------------------
# Course page parsing
# ---------------------------------------------------------------------------


def _find_course_block(soup: BeautifulSoup, prefix: str, number: str) -> Optional[Tag]:
    # Exact match on the first two title tokens: "CS 1005" must not match "CS 10051".
    wanted = [prefix.upper(), number.upper()]
    for block in soup.select("div.courseblock"):
        title_el = block.select_one(".courseblocktitle")
        if title_el and clean_text(title_el.get_text(" ")).upper().split()[:2] == wanted:
            return block
    return None


def _split_body(paragraphs: List[str]) -> Tuple[str, str]:
    """
    Return (description, prerequisites) from the course body paragraphs.
    """
    body = "\n".join(paragraphs)
    if PREREQ_MARKER in body:
        before, after = body.split(PREREQ_MARKER, 1)
        description = before.strip().split("\n")[0]
        prereqs = after.strip().split("\n")[0]
        return description, prereqs

    # No marker: the description is the first paragraph by position.
    logger.debug("No prerequisite marker, falling back to paragraph offsets")
    return (paragraphs[0] if paragraphs else ""), ""


def parse_course_block(
    html: str,
    prefix: str,
    number: str,
    marker: Optional[datetime] = None,
) -> Optional[Course]:
    """
    Parses the catalog search page and returns the course without sections.

    Returns None if the page does not list the requested course.
    """
    soup = BeautifulSoup(html, "html.parser")

    block = _find_course_block(soup, prefix, number)
    if block is None:
        return None

    # Title looks like 'CS 10051<nbsp x4>COMPUTER SCIENCE I (ELR)<nbsp x4>4 Credit Hours'
    title_el = block.select_one(".courseblocktitle")
    parts = [p for p in _TITLE_SPLIT.split(title_el.get_text().strip()) if p]
    catalog_name = clean_course_name(parts[1]) if len(parts) > 1 else ""
    credits = normalize_credits(parts[2]) if len(parts) > 2 else "0"

    paragraphs = [
        clean_text(p.get_text(" "))
        for p in block.select(".courseblockdesc, .courseblockextra")
    ]
    paragraphs = [p for p in paragraphs if p]

    description, prereqs = _split_body(paragraphs)
    extra = read_attributes(paragraphs[1:])

    grading = extra.get("Grade Mode")
    if grading:
        mode = GradingType.from_text(grading)
        grading = mode.value if mode is not GradingType.UNKNOWN else grading
    else:
        grading = DEFAULT_GRADING

    refresh_el = soup.select_one(".last-refresh")
    fallback = marker if marker is not None else datetime.now()
    last_data_marker = parse_data_marker(refresh_el.get_text() if refresh_el else "", fallback)

    return Course(
        name=f"{prefix}{number}",
        catalog_name=catalog_name,
        catalog_number=number,
        grading=grading,
        credits=credits,
        prerequisites=default_prerequisites(prereqs),
        description=default_description(description),
        attributes=parse_course_attributes(extra.get("Attributes", ""), number),
        sections=[],
        professors=[],
        last_data_marker=last_data_marker,
    )


# ---------------------------------------------------------------------------
# Section parsing (CORE LOGIC)
# ---------------------------------------------------------------------------


def parse_locations(block: Grid) -> List[Location]:
    """
    Walk the location column from the first row of a section block and stop
    at the first cell that is neither 'BLDG ROOM' nor the online marker.
    """
    col = COLUMNS["location"]
    locations: List[Location] = []

    for row in range(len(block)):
        value = cell(block, row, col)
        if value == ONLINE_MARKER:
            loc = Location(name=ONLINE_LOCATION, url=config.ONLINE_URL)
        elif _LOCATION.match(value):
            loc = Location(name=value)
        else:
            break

        if all(existing.name != loc.name for existing in locations):
            locations.append(loc)

    return locations


def parse_notes(block: Grid) -> str:
    notes = [
        row[0][len(NOTES_MARKER):].strip()
        for row in block
        if row and row[0].startswith(NOTES_MARKER)
    ]
    return " ".join(n for n in notes if n)


def parse_section_block(block: Grid, term_code: str) -> Section:
    """
    Parses the rows of exactly one section into a Section.
    """
    row = block[0]
    c = COLUMNS

    days = row[c["days"]]
    time = row[c["time"]]
    schedule = f"{days} {time}".strip()
    if not schedule or schedule.upper() in ("TBA", "TBA TBA"):
        schedule = "TBA"

    waitlist = cell(block, 0, c["waitlist"])
    enrollment = Enrollment.from_counts(
        current=_to_int(row[c["actual"]]),
        remaining=_to_int(row[c["remaining"]]),
        waitlist=_to_int(waitlist) if waitlist else None,
    )

    return Section(
        internal=SectionInternal(
            term_code=term_code,
            class_number=row[c["crn"]],
            class_section=row[c["section"]],
            session_code=row[c["session"]],
        ),
        term=describe_term(term_code),
        mode=row[c["mode"]],
        campus=Campus.from_code(row[c["campus"]]).value,
        instructor=clean_instructor(row[c["instructor"]]),
        section=row[c["section"]],
        session=describe_session(row[c["session"]]),
        schedule=schedule,
        location=parse_locations(block),
        enrollment=enrollment,
        notes=parse_notes(block),
    )


def parse_sections(html: str, term_code: str) -> List[Section]:
    """
    Parses a Banner class search page into all of its sections.
    """
    soup = BeautifulSoup(html, "html.parser")
    grid = extract_grid(find_table(soup, css_class="datadisplaytable"))

    sections = [parse_section_block(block, term_code) for block in split_section_blocks(grid)]
    logger.debug("Parsed %d sections for term %s", len(sections), term_code)
    return sections


def filter_by_campus(sections: Iterable[Section], campus: str) -> List[Section]:
    """
    Keep only sections taught at the given campus ('any' keeps everything).

    The comparison is case-insensitive on the campus name with spaces turned
    into underscores, e.g. 'east_liverpool' matches 'East Liverpool'.
    """
    wanted = (campus or "any").strip().lower()
    if wanted == "any":
        return list(sections)
    return [s for s in sections if s.campus.replace(" ", "_").lower() == wanted]


def build_professors(
    sections: List[Section],
    lookup: Callable[[str], List[str]],
) -> List[Professor]:
    """
    Create one Professor per distinct instructor name, in first-seen order.

    lookup(name) returns the external rating ids of that name.
    """
    professors: List[Professor] = []
    seen: List[str] = []

    for section in sections:
        name = section.instructor
        if not name or name.upper() == "TBA" or name in seen:
            continue
        seen.append(name)

        teaching = sorted(
            (s for s in sections if s.instructor == name),
            key=lambda s: (s.internal.term_code, s.section),
        )
        professors.append(Professor(name=name, sections=teaching, rmp_ids=lookup(name)))

    return professors


# ---------------------------------------------------------------------------
# Seat counts
# ---------------------------------------------------------------------------


def parse_enrollment(html: str, term: str, class_number: str, section: str) -> Optional[EnrollmentPayload]:
    """
    Parses the 'Seats' row of the Banner detail page.

    available = seats still open, total = capacity,
    overfill = at least as many students as seats,
    percent = share of seats taken (two decimals).
    """
    soup = BeautifulSoup(html, "html.parser")
    grid = extract_grid(find_table(soup, summary="seating numbers"))

    seats = next((row for row in grid if row and row[0] == "Seats"), None)
    if seats is None:
        return None

    total = _to_int(cell([seats], 0, 1))
    actual = _to_int(cell([seats], 0, 2))
    available = _to_int(cell([seats], 0, 3))

    return EnrollmentPayload(
        course={"term": term, "class_number": class_number, "section": section},
        available=available,
        total=total,
        overfill=actual >= total,
        percent=round(actual / total, 2) if total else 0.0,
    )
