"""
Catalog fetcher (HTTP -> raw HTML).

Each function performs exactly one request and returns the response body, or
None when anything goes wrong (network error, non-2xx status). Callers treat
None as "no data available" and never see an exception from here.

There is no retry and no backoff: one failed request means an empty result
for that part of the query.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import requests

from kentcourses import config


logger = logging.getLogger(__name__)

FormFields = List[Tuple[str, str]]


# ---------------------------------------------------------------------------
# Banner form bodies
# ---------------------------------------------------------------------------

# Banner expects every multi-select to be sent once with "dummy" before the
# real values. Names, order and wildcards are copied from the live search
# form; changing any of them makes the request fail.
_DUMMY_FIELDS: FormFields = [
    ("sel_subj", "dummy"),
    ("sel_day", "dummy"),
    ("sel_schd", "dummy"),
    ("sel_insm", "dummy"),
    ("sel_loc", "dummy"),
    ("sel_levl", "dummy"),
    ("sel_sess", "dummy"),
    ("sel_instr", "dummy"),
    ("sel_ptrm", "dummy"),
    ("sel_attr", "dummy"),
    ("sel_camp", "dummy"),
]


def build_sections_form(prefix: str, number: str, term: str) -> FormFields:
    """
    Build the POST body for the Banner class search of one course.
    """
    return [("term_in", term)] + _DUMMY_FIELDS + [
        ("sel_subj", prefix),
        ("sel_crse", number),
        ("sel_title", ""),
        ("sel_camp", "%"),
        ("sel_insm", "%"),
        ("sel_from_cred", ""),
        ("sel_to_cred", ""),
        ("sel_loc", "%"),
        ("sel_levl", "%"),
        ("sel_ptrm", "%"),
        ("sel_instr", "%"),
        ("sel_attr", "%"),
        ("begin_hh", "0"),
        ("begin_mi", "0"),
        ("begin_ap", "a"),
        ("end_hh", "0"),
        ("end_mi", "0"),
        ("end_ap", "a"),
    ]


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


def _request(method: str, url: str, **kwargs) -> Optional[str]:
    headers = {"User-Agent": config.USER_AGENT}
    try:
        resp = requests.request(method, url, headers=headers, timeout=config.REQUEST_TIMEOUT, **kwargs)
        resp.raise_for_status()
    except requests.RequestException as exc:
        logger.warning("%s %s failed: %s", method, url, exc)
        return None

    return resp.text


def fetch_course_page(prefix: str, number: str) -> Optional[str]:
    """
    Load the catalog search page for one course (course metadata).
    """
    return _request("GET", config.CATALOG_SEARCH_URL, params={"P": f"{prefix} {number}"})


def fetch_sections_page(prefix: str, number: str, term: str) -> Optional[str]:
    """
    Load the Banner class search result listing every section of a course
    in one term.
    """
    logger.debug("Fetching sections for %s %s (term %s)", prefix, number, term)
    return _request("POST", config.SECTIONS_URL, data=build_sections_form(prefix, number, term))


def fetch_enrollment_page(term: str, class_number: str) -> Optional[str]:
    """
    Load the Banner detail page holding the seat counts of one section.
    """
    return _request("POST", config.ENROLLMENT_URL, data=[("term_in", term), ("crn_in", class_number)])
