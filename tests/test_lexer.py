"""Tests for the EGG lexer."""

import pytest

from pandaegg.errors import FormatError
from pandaegg.lexer import scan, split_values
from pandaegg.tokens import EntryClose, EntryContent, EntryName, EntryOpen, FilePath


class TestScan:
    def test_single_vertex(self):
        tokens = scan("<Vertex> 0 { 1.0 2.0 3.0 }")
        assert tokens == [
            EntryOpen("Vertex"),
            EntryName("0"),
            EntryContent(("1.0", "2.0", "3.0")),
            EntryClose(),
        ]

    def test_content_stops_at_nested_entry(self):
        tokens = scan("<Vertex> 3 { 1.5 2.5 3.5 <RGBA> { 1 0 0 1 } }")
        assert tokens == [
            EntryOpen("Vertex"),
            EntryName("3"),
            EntryContent(("1.5", "2.5", "3.5")),
            EntryOpen("RGBA"),
            EntryName(""),
            EntryContent(("1", "0", "0", "1")),
            EntryClose(),
            EntryClose(),
        ]

    def test_empty_document(self):
        assert scan("") == []
        assert scan("  \n\t\r\n") == []

    def test_empty_name(self):
        tokens = scan("<Group> { }")
        assert tokens[1] == EntryName("")
        assert tokens[2] == EntryContent(())

    def test_name_whitespace_is_dropped(self):
        tokens = scan("<Group> left  arm\n{ }")
        assert tokens[1] == EntryName("leftarm")

    def test_name_directly_after_header(self):
        tokens = scan("<Group>box{}")
        assert tokens == [EntryOpen("Group"), EntryName("box"), EntryContent(()), EntryClose()]

    def test_nameless_types_skip_name(self):
        tokens = scan("<CoordinateSystem> { Y-Up }")
        assert tokens == [EntryOpen("CoordinateSystem"), EntryContent(("Y-Up",)), EntryClose()]

    def test_nameless_types_are_case_insensitive(self):
        tokens = scan('<comment> { "made by hand" }')
        assert tokens == [
            EntryOpen("comment"),
            FilePath("made by hand"),
            EntryContent(()),
            EntryClose(),
        ]

    def test_filepath_then_children(self):
        tokens = scan('<Texture> wood {\n  "maps/wood grain.png"\n  <Scalar> format { rgb }\n}')
        assert tokens[:4] == [
            EntryOpen("Texture"),
            EntryName("wood"),
            FilePath("maps/wood grain.png"),
            EntryContent(()),
        ]
        assert tokens[4] == EntryOpen("Scalar")

    def test_quote_after_values_is_a_value(self):
        tokens = scan('<Group> g { 1 "x" }')
        assert tokens[2] == EntryContent(("1", '"x"'))

    def test_line_comment_skipped(self):
        tokens = scan("// header comment\n<Group> g { }\n// trailing")
        assert tokens == [EntryOpen("Group"), EntryName("g"), EntryContent(()), EntryClose()]

    def test_comment_at_end_without_newline(self):
        assert scan("// only a comment") == []

    def test_positions_recorded(self):
        tokens = scan("\n  <Group> g {\n }")
        assert (tokens[0].line, tokens[0].column) == (2, 3)
        assert (tokens[-1].line, tokens[-1].column) == (3, 2)

    def test_positions_ignored_by_equality(self):
        assert EntryOpen("Group", 1, 1) == EntryOpen("Group", 9, 9)

    def test_anim_type_names(self):
        tokens = scan("<Xfm$Anim_S$> xform { <S$Anim> x { } }")
        assert tokens[0] == EntryOpen("Xfm$Anim_S$")
        assert tokens[3] == EntryOpen("S$Anim")


class TestScanErrors:
    def test_unrecognized_character(self):
        with pytest.raises(FormatError, match="'#'"):
            scan("# not an egg")

    def test_error_location(self):
        with pytest.raises(FormatError, match="line 2, column 3"):
            scan("<Group> g { }\n  @")

    def test_text_after_child_close(self):
        with pytest.raises(FormatError, match="'5'"):
            scan("<Group> g { <Dart> { 1 } 5 }")

    def test_unterminated_header(self):
        with pytest.raises(FormatError, match="Unterminated entry header"):
            scan("<Group")

    def test_missing_brace(self):
        with pytest.raises(FormatError, match="no opening brace"):
            scan("<Group> g")

    def test_unterminated_string(self):
        with pytest.raises(FormatError, match="Unterminated quoted string"):
            scan('<Texture> t { "maps/wood.png }')


class TestSplitValues:
    def test_whitespace_runs(self):
        assert split_values(" 1  2\r\n3\t4 ") == ("1", "2", "3", "4")

    def test_braces_dropped(self):
        assert split_values("{ 1 2{ }") == ("1", "2")

    def test_empty(self):
        assert split_values("\n  \r\n") == ()
