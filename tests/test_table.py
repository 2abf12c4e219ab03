"""Tests for TableStore parsing, access and serialization."""

import io

import pytest

from csv_tables import CellIndexError, ParseError, ResourceError, TableFormat, TableStore

SAMPLE = "a,b,c\n1,2,3\n"


class TestParse:
    """Tests for building a store from text, files and streams."""

    def test_parse_sample_rows(self):
        """Test that each line becomes one row in file order."""
        store = TableStore.loads(SAMPLE)

        assert store.row_count == 2
        assert store.get_row(0) == ("a", "b", "c")
        assert store.get_row(1) == ("1", "2", "3")

    def test_parse_empty_input(self):
        """Test that empty input gives an empty table, not an error."""
        store = TableStore.loads("")

        assert store.row_count == 0
        assert len(store) == 0
        assert store.rows() == []

    def test_parse_without_trailing_newline(self):
        """Test that the last line is kept when it has no terminator."""
        store = TableStore.loads("x,y\n1,2")

        assert store.rows() == [("x", "y"), ("1", "2")]

    def test_parse_crlf(self):
        """Test that carriage returns before newlines are dropped."""
        store = TableStore.loads("x,y\r\n1,2\r\n")

        assert store.get_cell(1, 1) == "2"

    def test_ragged_rows_preserved(self):
        """Test that rows of different widths are neither padded nor truncated."""
        store = TableStore.loads("a,b,c\n1\n\n4,5,6,7\n")

        assert store.rows() == [("a", "b", "c"), ("1",), ("",), ("4", "5", "6", "7")]

    def test_embedded_delimiter_splits(self):
        """Test that quoting is not interpreted."""
        store = TableStore.loads('"x,y",z\n')

        assert store.get_row(0) == ('"x', 'y"', "z")

    def test_parse_from_path(self, tmp_path):
        """Test parsing a file on disk."""
        path = tmp_path / "data.csv"
        path.write_text(SAMPLE)

        store = TableStore.parse(path)
        assert store.get_cell(1, 2) == "3"

        store = TableStore.parse(str(path))
        assert store.get_cell(0, 0) == "a"

    def test_parse_from_binary_stream(self):
        """Test parsing an open binary stream."""
        store = TableStore.parse(io.BytesIO(SAMPLE.encode()))

        assert store.get_row(1) == ("1", "2", "3")

    def test_parse_from_text_stream(self):
        """Test parsing an open text stream."""
        store = TableStore.parse(io.StringIO(SAMPLE))

        assert store.get_row(0) == ("a", "b", "c")

    def test_parse_missing_file(self, tmp_path):
        """Test that an unreadable file raises ResourceError naming the path."""
        path = tmp_path / "missing.csv"

        with pytest.raises(ResourceError) as exc_info:
            TableStore.parse(path)

        assert exc_info.value.path == path
        assert "missing.csv" in str(exc_info.value)

    def test_parse_undecodable_bytes(self):
        """Test that invalid bytes raise ParseError."""
        with pytest.raises(ParseError):
            TableStore.parse(io.BytesIO(b"a,\xff\xfe\n"))

    def test_parse_custom_format(self):
        """Test parsing with a different delimiter and encoding."""
        fmt = TableFormat(delimiter=";", encoding="latin-1")
        store = TableStore.parse(io.BytesIO("caf\xe9;1\n".encode("latin-1")), fmt)

        assert store.get_row(0) == ("caf\xe9", "1")


class TestAccess:
    """Tests for bounds-safe reads."""

    def test_get_cell(self):
        """Test reading individual cells."""
        store = TableStore.loads(SAMPLE)

        assert store.get_cell(1, 2) == "3"
        assert store.get_cell(0, 1) == "b"

    def test_out_of_range_reads_return_none(self):
        """Test that indices past the end return None."""
        store = TableStore.loads(SAMPLE)

        assert store.get_row(2) is None
        assert store.get_cell(2, 0) is None
        assert store.get_cell(0, 3) is None

    def test_negative_indices_return_none(self):
        """Test that negative indices do not wrap around."""
        store = TableStore.loads(SAMPLE)

        assert store.get_row(-1) is None
        assert store.get_cell(-1, 0) is None
        assert store.get_cell(0, -1) is None

    def test_empty_table_reads(self):
        """Test that every read on an empty table returns None."""
        store = TableStore.loads("")

        assert store.get_row(0) is None
        assert store.get_cell(0, 0) is None

    def test_returned_row_is_read_only(self):
        """Test that a returned row cannot change the store."""
        store = TableStore.loads(SAMPLE)
        row = store.get_row(0)

        with pytest.raises(TypeError):
            row[0] = "changed"  # type: ignore[index]

        assert store.get_cell(0, 0) == "a"

    def test_explicit_construction(self):
        """Test building a store from rows directly."""
        source = [["a", "b"], ["1", "2"]]
        store = TableStore(source)
        source[0][0] = "changed"

        assert store.get_cell(0, 0) == "a"
        assert store.dumps() == "a,b\n1,2\n"


class TestUpdateCell:
    """Tests for the in-place cell mutation."""

    def test_update_and_serialize(self):
        """Test the update-then-serialize scenario."""
        store = TableStore.loads(SAMPLE)

        store.update_cell(1, 2, "9")

        assert store.get_cell(1, 2) == "9"
        assert store.dumps() == "a,b,c\n1,2,9\n"

    def test_update_leaves_other_cells(self):
        """Test that only the target cell changes."""
        store = TableStore.loads(SAMPLE)
        before = store.rows()

        store.update_cell(0, 1, "B")

        after = store.rows()
        assert store.row_count == len(before)
        for r, row in enumerate(after):
            for c, value in enumerate(row):
                expected = "B" if (r, c) == (0, 1) else before[r][c]
                assert value == expected

    def test_update_row_out_of_range(self):
        """Test that a bad row index raises and changes nothing."""
        store = TableStore.loads(SAMPLE)

        with pytest.raises(CellIndexError) as exc_info:
            store.update_cell(5, 0, "x")

        assert exc_info.value.axis == "row"
        assert exc_info.value.row_index == 5
        assert store.dumps() == SAMPLE

    def test_update_column_out_of_range(self):
        """Test that a bad column index raises and changes nothing."""
        store = TableStore.loads(SAMPLE)

        with pytest.raises(CellIndexError) as exc_info:
            store.update_cell(0, 3, "x")

        assert exc_info.value.axis == "column"
        assert exc_info.value.col_index == 3
        assert store.dumps() == SAMPLE

    def test_cell_index_error_is_index_error(self):
        """Test that callers can catch the builtin IndexError."""
        store = TableStore.loads(SAMPLE)

        with pytest.raises(IndexError):
            store.update_cell(-1, 0, "x")


class TestSerialize:
    """Tests for writing tables out."""

    def test_serialize_empty(self):
        """Test that an empty table serializes to nothing."""
        assert TableStore.loads("").dumps() == ""

    def test_serialize_to_path(self, tmp_path):
        """Test writing a file and reading it back."""
        path = tmp_path / "out.csv"
        store = TableStore.loads(SAMPLE)

        store.serialize(path)

        assert path.read_bytes() == SAMPLE.encode()
        assert TableStore.parse(path).rows() == store.rows()

    def test_serialize_to_streams(self):
        """Test writing to binary and text streams."""
        store = TableStore.loads(SAMPLE)
        binary = io.BytesIO()
        text = io.StringIO()

        store.serialize(binary)
        store.serialize(text)

        assert binary.getvalue() == SAMPLE.encode()
        assert text.getvalue() == SAMPLE

    def test_serialize_is_idempotent(self, tmp_path):
        """Test that two serializations of an unchanged table are identical."""
        store = TableStore.loads("x,y\n1\n\n2,3,4")

        store.serialize(tmp_path / "one.csv")
        store.serialize(tmp_path / "two.csv")

        assert (tmp_path / "one.csv").read_bytes() == (tmp_path / "two.csv").read_bytes()

    def test_round_trip(self):
        """Test that parse(serialize(T)) reproduces T."""
        rows = [["id", "name", "note"], ["1", "Ada", ""], ["2", "Grace Hopper"], [""]]
        store = TableStore(rows)

        again = TableStore.loads(store.dumps())

        assert again.rows() == [tuple(r) for r in rows]

    def test_serialize_custom_terminator(self):
        """Test that the configured delimiter and terminator are used."""
        store = TableStore([["a", "b"], ["1", "2"]], TableFormat(delimiter="\t", line_terminator="\r\n"))

        assert store.dumps() == "a\tb\r\n1\t2\r\n"

    @pytest.mark.parametrize("terminator", ["\r", "\r\n", "|"])
    def test_round_trip_custom_terminator(self, terminator):
        """Test that parsing splits on the configured line terminator."""
        fmt = TableFormat(line_terminator=terminator)
        store = TableStore([["a", "b"], ["1", "2"]], fmt)

        again = TableStore.loads(store.dumps(), fmt)

        assert again.rows() == [("a", "b"), ("1", "2")]

    def test_custom_terminator_keeps_newlines(self):
        """Test that a newline is ordinary cell text under another terminator."""
        fmt = TableFormat(line_terminator="\r")

        store = TableStore.loads("a\nb,c\r1,2\r", fmt)

        assert store.rows() == [("a\nb", "c"), ("1", "2")]

    def test_serialize_unwritable_path(self, tmp_path):
        """Test that an unwritable destination raises ResourceError."""
        store = TableStore.loads(SAMPLE)
        path = tmp_path / "no_such_dir" / "out.csv"

        with pytest.raises(ResourceError) as exc_info:
            store.serialize(path)

        assert exc_info.value.path == path
        assert store.dumps() == SAMPLE
