"""
HTML table extraction (DOM -> grid of strings).

The grid is row-major: grid[row][column]. Cells spanning several columns are
repeated in every column they cover, so fixed column offsets keep working on
rows that contain a colspan.

Correctness depends entirely on the current markup of the target pages; a
layout change produces wrong offsets, not an error.
"""

from __future__ import annotations

import re
from typing import List, Optional

from bs4 import BeautifulSoup, Tag


Grid = List[List[str]]

# A row whose first cell is exactly this separates two sections.
SECTION_DELIMITER = "-" * 20

_WS = re.compile(r"\s+")


def clean_text(text: str) -> str:
    """Collapse all whitespace (including &nbsp;) into single spaces."""
    return _WS.sub(" ", text or "").strip()


def find_table(
    soup: BeautifulSoup,
    css_class: Optional[str] = None,
    summary: Optional[str] = None,
) -> Optional[Tag]:
    """
    Return the first table matching a CSS class or containing the given text
    in its summary attribute.
    """
    for table in soup.find_all("table"):
        if css_class and css_class in (table.get("class") or []):
            return table
        if summary and summary.lower() in (table.get("summary") or "").lower():
            return table
    return None


def extract_grid(table: Optional[Tag]) -> Grid:
    """
    Extract every row of a table into a list of cell strings.
    """
    grid: Grid = []
    if table is None:
        return grid

    for row in table.find_all("tr"):
        cells: List[str] = []
        for cell in row.find_all(["td", "th"], recursive=False):
            text = clean_text(cell.get_text(" "))
            try:
                span = int(cell.get("colspan", 1))
            except (TypeError, ValueError):
                span = 1
            cells.extend([text] * max(span, 1))
        grid.append(cells)

    return grid


def cell(grid: Grid, row: int, column: int, default: str = "") -> str:
    """Safe lookup for optional columns."""
    if row < 0 or row >= len(grid) or column < 0 or column >= len(grid[row]):
        return default
    return grid[row][column]


def split_section_blocks(grid: Grid) -> List[Grid]:
    """
    Split a class-search grid into one block of rows per section.

    Blocks are the rows between two successive delimiter rows; header rows
    before the first delimiter and anything after the last one are dropped.
    """
    sentinels = [i for i, row in enumerate(grid) if row and row[0] == SECTION_DELIMITER]

    blocks: List[Grid] = []
    for start, end in zip(sentinels, sentinels[1:]):
        block = grid[start + 1:end]
        if block:
            blocks.append(block)
    return blocks
