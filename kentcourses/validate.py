"""
Identifier validation.

Runs before any network call: a string that does not look like a course or
section identifier never reaches the catalog.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple


# 2-4 letter subject, 3-5 digit number, optional qualifier letter.
COURSE_IDENTIFIER = re.compile(r"^([a-zA-Z]{2,4})(\d{3,5})(Q|E|W)?$")
SECTION_IDENTIFIER = re.compile(r"^(H|Z|W|N)*\d{2,3}(L|D|X)*$")


def is_course_identifier(identifier: str) -> bool:
    return bool(COURSE_IDENTIFIER.match(identifier or ""))


def is_section_identifier(section: str) -> bool:
    return bool(SECTION_IDENTIFIER.match(section or ""))


def split_identifier(identifier: str) -> Optional[Tuple[str, str]]:
    """
    Split 'cs10051' into ('CS', '10051') and 'ENGL1010W' into ('ENGL', '1010W').

    The qualifier letter stays on the number: CS10051 and CS10051W are
    different courses.

    Returns None if the identifier is not valid.
    """
    m = COURSE_IDENTIFIER.match(identifier or "")
    if not m:
        return None
    return m.group(1).upper(), m.group(2) + (m.group(3) or "")
