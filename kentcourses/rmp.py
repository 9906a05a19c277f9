"""
RateMyProfessors enrichment.

Two ways to find the RMP ids of an instructor, picked by
config.RMP_STRATEGY:

- "graphql": ask the RMP GraphQL search for the name within the campus'
  school id and keep the candidates whose name matches
- "mapping": look the name up in the bundled rmp_ids.json (exact, then
  fuzzy), and only search the live RMP web page when nothing is similar
  enough

Neither path raises: a network problem yields the input name with no ids.
"""

from __future__ import annotations

import base64
import logging
from collections import Counter
from typing import Any, Dict, List, Optional

import requests
from bs4 import BeautifulSoup

from kentcourses import config
from kentcourses.constants import RmpCampus
from kentcourses.mappings import load_rmp_mappings
from kentcourses.model import RateMyProfessorReport, RateMyProfessorResponse


logger = logging.getLogger(__name__)


SEARCH_QUERY = """query TeacherSearchQuery($text: String!, $schoolID: ID!) {
  newSearch {
    teachers(query: {text: $text, schoolID: $schoolID}) {
      edges {
        node {
          id
          legacyId
          firstName
          lastName
          school {
            id
            name
          }
        }
      }
    }
  }
}"""

REPORT_QUERY = """query TeacherRatingsQuery($id: ID!) {
  node(id: $id) {
    ... on Teacher {
      id
      legacyId
      firstName
      lastName
      avgRating
      avgDifficulty
      wouldTakeAgainPercent
      numRatings
      teacherRatingTags {
        tagName
        tagCount
      }
    }
  }
}"""


# ---------------------------------------------------------------------------
# Name matching
# ---------------------------------------------------------------------------


def _bigrams(text: str) -> Counter:
    return Counter(text[i:i + 2] for i in range(len(text) - 1))


def compare_two_strings(first: str, second: str) -> float:
    """
    Sørensen-Dice coefficient over character bigrams, whitespace ignored.

    Returns a score between 0 (nothing in common) and 1 (identical).
    """
    a = "".join((first or "").split())
    b = "".join((second or "").split())

    if a == b:
        return 1.0
    if len(a) < 2 or len(b) < 2:
        return 0.0

    overlap = sum((_bigrams(a) & _bigrams(b)).values())
    return 2.0 * overlap / (len(a) + len(b) - 2)


def names_match(instructor: str, candidate: str) -> bool:
    """
    A candidate matches when it contains every token of the instructor name,
    or when the two names are similar enough.
    """
    s1 = instructor.lower().split()
    s2 = candidate.lower().split()
    if s1 and all(token in s2 for token in s1):
        return True
    return compare_two_strings(" ".join(s1), " ".join(s2)) >= config.SIMILARITY_THRESHOLD


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------


def _graphql(query: str, variables: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    headers = {
        "Authorization": config.RMP_AUTH_HEADER,
        "Content-Type": "application/json",
        "User-Agent": config.USER_AGENT,
        "Referer": "https://www.ratemyprofessors.com/",
    }
    try:
        resp = requests.post(
            config.RMP_GRAPHQL_URL,
            json={"query": query, "variables": variables},
            headers=headers,
            timeout=config.REQUEST_TIMEOUT,
        )
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as exc:
        logger.warning("RMP GraphQL request failed: %s", exc)
        return None

    return data if isinstance(data, dict) else None


# ---------------------------------------------------------------------------
# Search strategies
# ---------------------------------------------------------------------------


def _search_graphql(instructor: str, campus: str) -> RateMyProfessorResponse:
    school = RmpCampus.for_campus(campus).value
    data = _graphql(SEARCH_QUERY, {"text": instructor, "schoolID": school})
    if data is None:
        return RateMyProfessorResponse(name=instructor, rmp_ids=[])

    search = (data.get("data") or {}).get("newSearch") or {}
    edges = (search.get("teachers") or {}).get("edges") or []

    ids: List[str] = []
    for edge in edges:
        node = edge.get("node") if isinstance(edge, dict) else None
        if not node or node.get("legacyId") is None:
            continue
        candidate = f"{node.get('firstName', '')} {node.get('lastName', '')}"
        if names_match(instructor, candidate):
            ids.append(str(node["legacyId"]))

    return RateMyProfessorResponse(name=instructor, rmp_ids=ids)


def _search_html(instructor: str) -> RateMyProfessorResponse:
    """
    Scrape the public RMP professor search page for Kent State cards.
    """
    url = config.RMP_SEARCH_URL.format(school=config.RMP_LEGACY_SCHOOL_ID)
    try:
        resp = requests.get(
            url,
            params={"q": instructor},
            headers={"User-Agent": config.USER_AGENT},
            timeout=config.REQUEST_TIMEOUT,
        )
        resp.raise_for_status()
    except requests.RequestException as exc:
        logger.warning("RMP search for %r failed: %s", instructor, exc)
        return RateMyProfessorResponse(name=instructor, rmp_ids=[])

    soup = BeautifulSoup(resp.text, "html.parser")
    ids: List[str] = []

    for card in soup.select("a[class*='TeacherCard__StyledTeacherCard']"):
        school_el = card.select_one("[class*='CardSchool__School']")
        if not school_el or config.RMP_SCHOOL_NAME not in school_el.get_text(" "):
            continue

        name_el = card.select_one("[class*='CardName__StyledCardName']")
        if not name_el or not names_match(instructor, name_el.get_text(" ")):
            continue

        href = card.get("href", "")
        rmp_id = href.split("tid=")[-1] if "tid=" in href else href.rstrip("/").split("/")[-1]
        if rmp_id and rmp_id not in ids:
            ids.append(rmp_id)

    return RateMyProfessorResponse(name=instructor, rmp_ids=ids)


def _search_mapping(instructor: str) -> RateMyProfessorResponse:
    table = load_rmp_mappings()

    wanted = instructor.lower()
    for entry in table:
        if entry["name"].lower() == wanted:
            return RateMyProfessorResponse(name=instructor, rmp_ids=list(entry["rmp_ids"]))

    scored = sorted(
        ((compare_two_strings(wanted, entry["name"].lower()), entry) for entry in table),
        key=lambda pair: pair[0],
        reverse=True,
    )
    if scored and scored[0][0] > config.SIMILARITY_THRESHOLD:
        best = scored[0][1]
        logger.debug("Fuzzy matched %r to %r (%.2f)", instructor, best["name"], scored[0][0])
        return RateMyProfessorResponse(name=best["name"], rmp_ids=list(best["rmp_ids"]))

    return _search_html(instructor)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def search_rmp(
    instructor: str,
    campus: str = "any",
    strategy: Optional[str] = None,
) -> Optional[RateMyProfessorResponse]:
    """
    Attempts to locate RMP entries for one instructor.

    Returns None only for a blank name. A failed lookup returns the name
    with an empty id list.
    """
    name = (instructor or "").strip()
    if not name:
        return None

    strategy = (strategy or config.RMP_STRATEGY).lower()
    if strategy == "mapping":
        return _search_mapping(name)
    return _search_graphql(name, campus)


def lookup_rmp_ids(instructor: str, campus: str = "any") -> List[str]:
    res = search_rmp(instructor, campus)
    return res.rmp_ids if res else []


def get_rmp_report(rmp_id: str) -> Optional[RateMyProfessorReport]:
    """
    Fetch the rating summary of one RMP teacher id, or None on failure.
    """
    rmp_id = str(rmp_id or "").strip()
    if not rmp_id:
        return None

    node_id = base64.b64encode(f"Teacher-{rmp_id}".encode("utf-8")).decode("ascii")
    data = _graphql(REPORT_QUERY, {"id": node_id})
    if data is None:
        return None

    node = (data.get("data") or {}).get("node")
    if not isinstance(node, dict):
        return None

    tags = sorted(
        (t for t in node.get("teacherRatingTags") or [] if isinstance(t, dict) and t.get("tagName")),
        key=lambda t: t.get("tagCount") or 0,
        reverse=True,
    )

    try:
        return RateMyProfessorReport(
            name=f"{node.get('firstName', '')} {node.get('lastName', '')}".strip(),
            average=float(node.get("avgRating") or 0),
            ratings=int(node.get("numRatings") or 0),
            take_again=float(node.get("wouldTakeAgainPercent") or 0),
            difficulty=float(node.get("avgDifficulty") or 0),
            tags=[t["tagName"].strip() for t in tags],
        )
    except (TypeError, ValueError) as exc:
        logger.warning("Malformed RMP report for %s: %s", rmp_id, exc)
        return None
