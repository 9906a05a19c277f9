import unittest

from bs4 import BeautifulSoup

from kentcourses.tables import SECTION_DELIMITER, cell, extract_grid, find_table, split_section_blocks


HTML = """
<table class="other"><tr><td>ignored</td></tr></table>
<table class="datadisplaytable" summary="This layout table is used to present the seating numbers.">
  <tr><th colspan="3">Title</th></tr>
  <tr><td>a</td><td>b&nbsp;&nbsp;c</td><td>
      d</td></tr>
</table>
"""


class TestExtractGrid(unittest.TestCase):
    def setUp(self) -> None:
        self.soup = BeautifulSoup(HTML, "html.parser")

    def test_find_by_class(self) -> None:
        table = find_table(self.soup, css_class="datadisplaytable")
        self.assertIsNotNone(table)

    def test_find_by_summary(self) -> None:
        table = find_table(self.soup, summary="Seating Numbers")
        self.assertIsNotNone(table)
        self.assertIsNone(find_table(self.soup, summary="nothing like this"))

    def test_colspan_is_repeated_and_text_cleaned(self) -> None:
        grid = extract_grid(find_table(self.soup, css_class="datadisplaytable"))
        self.assertEqual(grid, [["Title", "Title", "Title"], ["a", "b c", "d"]])

    def test_missing_table_gives_empty_grid(self) -> None:
        self.assertEqual(extract_grid(None), [])

    def test_cell_lookup(self) -> None:
        grid = [["a", "b"], ["c"]]
        self.assertEqual(cell(grid, 0, 1), "b")
        self.assertEqual(cell(grid, 1, 1, default="-"), "-")


class TestSplitSectionBlocks(unittest.TestCase):
    def test_blocks_between_sentinels(self) -> None:
        grid = [
            ["header"],
            [SECTION_DELIMITER],
            ["s1-row1"],
            ["s1-row2"],
            [SECTION_DELIMITER],
            ["s2-row1"],
            [SECTION_DELIMITER],
            ["trailing"],
        ]
        blocks = split_section_blocks(grid)
        self.assertEqual(blocks, [[["s1-row1"], ["s1-row2"]], [["s2-row1"]]])

    def test_shorter_dash_run_is_not_a_sentinel(self) -> None:
        grid = [[SECTION_DELIMITER], ["-----"], ["x"], [SECTION_DELIMITER]]
        self.assertEqual(split_section_blocks(grid), [[["-----"], ["x"]]])

    def test_no_sentinels(self) -> None:
        self.assertEqual(split_section_blocks([["a"], ["b"]]), [])


if __name__ == "__main__":
    unittest.main()
