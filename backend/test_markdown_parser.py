"""
Tests for the markdown helpers: front matter, pipe tables, sections.
"""

from archexport.parsing.markdown import parse_front_matter, parse_tables, split_sections


# =============================================================================
# Front matter
# =============================================================================

class TestFrontMatter:

    def test_reads_flat_keys(self):
        text = "---\ntogaf_phase: B\nstatus: draft\n---\n# Title\n"
        assert parse_front_matter(text) == {"togaf_phase": "B", "status": "draft"}

    def test_value_keeps_everything_after_first_colon(self):
        text = "---\nupdated: 2026-01-01T10:30:00Z\n---\n"
        assert parse_front_matter(text)["updated"] == "2026-01-01T10:30:00Z"

    def test_strips_surrounding_quotes(self):
        text = "---\ntitle: \"Business Architecture\"\nowner: 'Ops'\n---\n"
        result = parse_front_matter(text)
        assert result["title"] == "Business Architecture"
        assert result["owner"] == "Ops"

    def test_lines_without_colon_are_ignored(self):
        text = "---\njust some text\nkey: value\n---\n"
        assert parse_front_matter(text) == {"key": "value"}

    def test_block_must_lead_the_document(self):
        assert parse_front_matter("# Title\n---\nkey: value\n---\n") == {}

    def test_missing_block(self):
        assert parse_front_matter("no front matter here") == {}

    def test_windows_newlines(self):
        assert parse_front_matter("---\r\nkey: value\r\n---\r\n") == {"key": "value"}


# =============================================================================
# Tables
# =============================================================================

class TestTables:

    def test_rows_keyed_by_header(self):
        text = "| Name | Owner |\n|------|-------|\n| CRM | Sales |\n| ERP | Finance |\n"
        tables = parse_tables(text)
        assert tables == [[
            {"Name": "CRM", "Owner": "Sales"},
            {"Name": "ERP", "Owner": "Finance"},
        ]]

    def test_short_rows_are_padded(self):
        text = "| A | B | C |\n|---|---|---|\n| 1 | 2 |\n"
        assert parse_tables(text) == [[{"A": "1", "B": "2", "C": ""}]]

    def test_table_without_data_rows_is_dropped(self):
        text = "| A | B |\n|---|---|\n\nparagraph\n"
        assert parse_tables(text) == []

    def test_header_without_separator_is_not_a_table(self):
        text = "| A | B |\n| 1 | 2 |\n"
        assert parse_tables(text) == []

    def test_multiple_tables_in_order(self):
        text = (
            "| X |\n|---|\n| 1 |\n"
            "\nsome prose\n\n"
            "| Y | Z |\n|:--|--:|\n| 2 | 3 |\n"
        )
        tables = parse_tables(text)
        assert len(tables) == 2
        assert tables[0] == [{"X": "1"}]
        assert tables[1] == [{"Y": "2", "Z": "3"}]

    def test_table_ends_at_first_non_table_line(self):
        text = "| A |\n|---|\n| 1 |\ntext\n| 2 |\n"
        assert parse_tables(text) == [[{"A": "1"}]]


# =============================================================================
# Sections
# =============================================================================

class TestSections:

    def test_split_on_headings(self):
        text = "intro\n# One\nbody one\n## Two\nbody two\n"
        sections = split_sections(text)
        assert [(s.heading, s.level) for s in sections] == [(None, 0), ("One", 1), ("Two", 2)]
        assert "body two" in sections[2].body

    def test_headings_inside_code_fences_are_ignored(self):
        text = "# Real\n```\n# not a heading\n```\n"
        sections = split_sections(text)
        assert [s.heading for s in sections] == ["Real"]
        assert "# not a heading" in sections[0].body
