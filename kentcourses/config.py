"""
Runtime configuration.

Everything the scraper needs to know about the outside world lives here:
target URLs, the term codes to crawl and a handful of knobs that can be
overridden through environment variables (or a local .env file).

URLs, form defaults and the RMP auth header are fixed: they mirror the live
sites and requests fail if they change.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv()


PACKAGE_DIR = Path(__file__).resolve().parent


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [x.strip() for x in raw.split(",") if x.strip()]


# ---------------------------------------------------------------------------
# Paths & URLs
# ---------------------------------------------------------------------------

DATA_DIR = Path(os.getenv("KENTCOURSES_DATA_DIR", str(PACKAGE_DIR / "data")))
COURSE_MAPPINGS_FILE = DATA_DIR / "courses.json"
RMP_MAPPINGS_FILE = DATA_DIR / "rmp_ids.json"

CATALOG_SEARCH_URL = "https://catalog.kent.edu/search/"
SECTIONS_URL = "https://keys.kent.edu/ePROD/bwlkffcs.P_AdvUnsecureGetCrse"
ENROLLMENT_URL = "https://keys.kent.edu/ePROD/bwckschd.p_disp_detail_sched"

RMP_GRAPHQL_URL = "https://www.ratemyprofessors.com/graphql"
RMP_SEARCH_URL = "https://www.ratemyprofessors.com/search/professors/{school}"
RMP_AUTH_HEADER = "Basic dGVzdDp0ZXN0"
RMP_LEGACY_SCHOOL_ID = "482"
RMP_SCHOOL_NAME = "Kent State University"

ONLINE_URL = "https://www.kent.edu/online"


# ---------------------------------------------------------------------------
# Tunables
# ---------------------------------------------------------------------------

# Term codes are crawled one after another, in this order.
TERMS = _env_list("KENTCOURSES_TERMS", "202380,202410")

# "graphql" queries RMP directly, "mapping" tries the bundled table first.
RMP_STRATEGY = os.getenv("KENTCOURSES_RMP_STRATEGY", "graphql").strip().lower()

USER_AGENT = os.getenv(
    "KENTCOURSES_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/136.0.0.0 Safari/537.36",
)

LOG_LEVEL = os.getenv("KENTCOURSES_LOG_LEVEL", "WARNING").upper()

REQUEST_TIMEOUT = 30
SIMILARITY_THRESHOLD = 0.70
