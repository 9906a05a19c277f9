"""
Read-only lookup tables.

Every "detect X from a string" helper is a total function: unknown input maps
to an explicit UNKNOWN member instead of a sentinel string or None.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict


class Campus(Enum):
    KENT = "Kent"
    EAST_LIVERPOOL = "East Liverpool"
    TRUMBULL = "Trumbull"
    TUSCARAWAS = "Tuscarawas"
    STARK = "Stark"
    GEAUGA = "Geauga"
    ASHTABULA = "Ashtabula"
    SALEM = "Salem"
    TWINSBURG = "Twinsburg"
    UNKNOWN = "Unknown"

    @classmethod
    def from_code(cls, code: str) -> "Campus":
        """Translate a Banner campus abbreviation (e.g. 'KC')."""
        return _CAMPUS_CODES.get((code or "").strip().upper(), cls.UNKNOWN)

    @property
    def slug(self) -> str:
        return self.value.replace(" ", "_").lower()


_CAMPUS_CODES: Dict[str, Campus] = {
    "KC": Campus.KENT,
    "EL": Campus.EAST_LIVERPOOL,
    "TR": Campus.TRUMBULL,
    "TU": Campus.TUSCARAWAS,
    "ST": Campus.STARK,
    "GE": Campus.GEAUGA,
    "AS": Campus.ASHTABULA,
    "SA": Campus.SALEM,
    "TW": Campus.TWINSBURG,
}

# Values accepted by the campus filter ("any" disables filtering).
CAMPUS_TYPES = ("any",) + tuple(c.slug for c in Campus if c is not Campus.UNKNOWN)


class RmpCampus(Enum):
    """RateMyProfessors GraphQL school ids, per regional campus."""

    KENT = "U2Nob29sLTQ4Mg=="
    EAST_LIVERPOOL = "U2Nob29sLTIzMTA="
    TRUMBULL = "U2Nob29sLTIzMTI="
    TUSCARAWAS = "U2Nob29sLTIzMTM="
    STARK = "U2Nob29sLTQyNjg="
    GEAUGA = "U2Nob29sLTUyMDg="
    ASHTABULA = "U2Nob29sLTIzMTA="
    SALEM = "U2Nob29sLTIzMTE="

    @classmethod
    def for_campus(cls, campus: str) -> "RmpCampus":
        # "any" and unknown campuses use the main campus listing.
        key = (campus or "").strip().upper()
        return cls.__members__.get(key, cls.KENT)


class ContentArea(Enum):
    COMPOSITION = "Kent Core Composition"
    MATHEMATICS = "Kent Core Mathematics and Critical Reasoning"
    HUMANITIES = "Kent Core Humanities and Fine Arts"
    SOCIAL_SCIENCES = "Kent Core Social Sciences"
    BASIC_SCIENCES = "Kent Core Basic Sciences"
    ADDITIONAL = "Kent Core Additional"
    UNKNOWN = "Unknown"

    @classmethod
    def from_name(cls, name: str) -> "ContentArea":
        for area in cls:
            if area.value == (name or "").strip():
                return area
        return cls.UNKNOWN


class GradingType(Enum):
    GRADED = "Standard Letter"
    SATISFACTORY_UNSATISFACTORY = "Satisfactory/Unsatisfactory"
    HONORS_CREDIT = "Honors"
    REGISTERED = "Registered"
    UNKNOWN = "Unavailable"

    @classmethod
    def from_text(cls, text: str) -> "GradingType":
        """Catalog grade modes carry suffixes such as 'Standard Letter-IP'."""
        raw = (text or "").strip().lower()
        for mode in cls:
            if mode is not cls.UNKNOWN and raw.startswith(mode.value.lower()):
                return mode
        return cls.UNKNOWN


class Building(Enum):
    AFC = "FedEx Aeronautics Academic Center"
    AAC = "Allerton Sports Complex"
    AIR = "Airport Hangar/Office Bldg."
    ALN = "Allyn Hall"
    ANX = "M.A.C.C. Annex"
    ASB = "Administrative Service Building"
    ATB = "Aeronautics and Engineering Building"
    BEA = "Twin Towers Center"
    BEL = "Beall Hall"
    BOW = "Bowman Hall"
    BSA = "Business Administration Building"
    BST = "Baseball and Softball Training Facility"
    CAE = "Center for Architecture and Environmental Design"
    CBH = "Golf Course Clubhouse"
    CDC = "Child Development Center"
    CHH = "Cunningham Hall and Research Wing"
    CLK = "Clark Hall"
    CPA = "Center for the Performing Arts"
    CPM = "College of Podiatric Medicine"
    CUE = "Center for Undergraduate Excellence"
    CVA = "Center for the Visual Arts"
    CWH = "Cartwright Hall"
    DHC = "DeWeese Health Center"
    DIH = "Design Innovation Hub"
    DUN = "Dunbar Hall"
    ENG = "Engleman Hall"
    FLR = "Fletcher Hall"
    FRH = "Franklin Hall"
    HAR = "Harbourt Hall"
    HDN = "Henderson Hall"
    ICA = "Ice Arena"
    ISB = "Integrated Sciences Building"
    JHN = "Johnson Hall"
    KOO = "Koonce Hall"
    KTH = "Kent Hall and South Wing"
    LCM = "Liquid Crystals Materials Science Building"
    LIB = "Library"
    LRH = "Lowry Hall"
    MAC = "Memorial Athletic and Convocation Center"
    MCG = "McGilvrey Hall"
    MLH = "Merrill Hall"
    MOU = "Moulton Hall"
    MSB = "Mathematical Sciences Building"
    MSC = "Schwartz Center"
    NXH = "Nixson Hall"
    OLS = "Olson Hall"
    ORH = "Oscar Ritchie Hall"
    PRN = "Prentice Hall"
    ROC = "Rockwell Hall"
    RSO = "Research One Building"
    SFH = "Satterfield Hall"
    SMH = "Smith Hall"
    SRB = "Science Research Building"
    SRC = "Student Recreation and Wellness Center"
    STB = "Stockdale Building"
    STC = "Student Center"
    STH = "Stewart Hall"
    TLH = "Taylor Hall"
    TRT = "Tri Towers Rotunda"
    VER = "Verder Hall"
    VNC = "Van Campen Hall"
    WMH = "Williams Hall"
    WRT = "Wright Hall"
    WTH = "White Hall"
    UNKNOWN = "Unknown"

    @classmethod
    def from_code(cls, code: str) -> "Building":
        return cls.__members__.get((code or "").strip().upper(), cls.UNKNOWN)


# Last two digits of a Banner term code.
TERM_SEASONS: Dict[str, str] = {
    "10": "Spring",
    "60": "Summer",
    "80": "Fall",
}

# Banner "part of term" codes.
SESSIONS: Dict[str, str] = {
    "1": "Full Semester",
    "2": "First Half",
    "3": "Second Half",
    "OL": "Online Session",
}


def describe_term(term_code: str) -> str:
    """
    Human-facing name of a term code, e.g. '202380' -> 'Fall 2023'.

    Unknown codes are returned unchanged.
    """
    code = (term_code or "").strip()
    if len(code) != 6 or not code.isdigit():
        return code
    season = TERM_SEASONS.get(code[4:])
    if not season:
        return code
    return f"{season} {code[:4]}"


def describe_session(session_code: str) -> str:
    code = (session_code or "").strip()
    if not code:
        return ""
    return SESSIONS.get(code.upper(), f"Session {code}")
