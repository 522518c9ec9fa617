"""
Unit tests for corpus/record.py and corpus/file_processor.py.

Coverage:
- Record.from_line(): projection of lang/text, malformed, nested and surrogate lines
- decode_records(): "\\n" splitting, CRLF, blank and bad lines
- read_file(): bz2 + UTF-8 decoding, file-level DecodeError
- aggregate_file() / process_file(): local per-language counts
"""

import bz2
import json

import pytest

from corpus.errors import DecodeError
from corpus.file_processor import aggregate_file, decode_records, process_file, read_file
from corpus.record import Record


class TestRecord:
    """Test decoding one line."""

    def test_projection(self):
        line = json.dumps({"id": 1, "lang": "en", "text": "hi there", "user": {"id": 2}})
        assert Record.from_line(line) == Record(language="en", text="hi there")

    @pytest.mark.parametrize(
        "line",
        [
            "not json",
            "[1, 2]",
            '"just a string"',
            '{"lang": "en"}',
            '{"text": "hello"}',
            '{"lang": null, "text": "hello"}',
            '{"lang": "en", "text": 42}',
            '{"delete": {"status": {"id": 1}}}',
        ],
    )
    def test_malformed(self, line):
        assert Record.from_line(line) is None

    def test_deeply_nested_line(self):
        """A line nesting past the recursion limit is skipped, not raised."""
        assert Record.from_line("[" * 100000) is None
        assert Record.from_line('{"a":' * 100000) is None

    @pytest.mark.parametrize(
        "line",
        [
            '{"lang": "en", "text": "\\ud83dabc"}',
            '{"lang": "\\udc00", "text": "hello"}',
            '{"lang": "en", "text": "ok \\ude00"}',
        ],
    )
    def test_lone_surrogate(self, line):
        assert Record.from_line(line) is None

    def test_surrogate_pair_kept(self):
        record = Record.from_line('{"lang": "en", "text": "\\ud83d\\ude00 hi"}')
        assert record == Record("en", "\U0001F600 hi")

    @pytest.mark.parametrize(
        "line",
        ['{"lang": "en", "text": "bad \\x escape"}', '{"lang": "en", "text": "cut', "{'lang': 'en'}"],
    )
    def test_invalid_escape_and_syntax(self, line):
        assert Record.from_line(line) is None

    def test_frozen(self):
        record = Record("en", "x")
        with pytest.raises(AttributeError):
            record.text = "y"


class TestDecodeRecords:
    """Test splitting decompressed content into records."""

    def test_skips_bad_lines(self):
        content = "\n".join(
            [
                '{"lang": "en", "text": "one"}',
                "garbage",
                "",
                '{"lang": "fr", "text": "deux"}',
            ]
        )
        records = decode_records(content)
        assert records == [Record("en", "one"), Record("fr", "deux")]

    def test_crlf(self):
        content = '{"lang": "en", "text": "a"}\r\n{"lang": "en", "text": "b"}\r\n'
        assert [r.text for r in decode_records(content)] == ["a", "b"]

    def test_line_separator_inside_text(self):
        """Only "\\n" ends a line; U+2028 inside a JSON string is kept."""
        content = '{"lang": "en", "text": "a\u2028b"}'
        assert decode_records(content) == [Record("en", "a\u2028b")]

    def test_empty(self):
        assert decode_records("") == []


class TestReadFile:
    """Test file-level decoding."""

    def test_reads_posts(self, make_dump):
        path = make_dump("a.bz2", [{"lang": "en", "text": "hello"}], extra_lines=["{broken"])
        assert read_file(path) == [Record("en", "hello")]

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "bad.bz2"
        path.write_bytes(b"this is not bzip2 data")
        with pytest.raises(DecodeError):
            read_file(path)

    def test_truncated_file(self, tmp_path):
        data = bz2.compress(b'{"lang": "en", "text": "hello"}\n' * 100)
        path = tmp_path / "short.bz2"
        path.write_bytes(data[: len(data) // 2])
        with pytest.raises(DecodeError):
            read_file(path)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "latin1.bz2"
        path.write_bytes(bz2.compress('{"lang": "fr", "text": "été"}'.encode("latin-1")))
        with pytest.raises(DecodeError) as exc_info:
            read_file(path)
        assert exc_info.value.path == path

    def test_missing_file(self, tmp_path):
        with pytest.raises(DecodeError):
            read_file(tmp_path / "missing.bz2")


class TestAggregateFile:
    """Test the local per-file table."""

    def test_counts_per_language(self):
        records = [
            Record("en", "hello world hello"),
            Record("en", "@bob hello"),
            Record("es", "hola mundo"),
        ]
        local_map = aggregate_file(records)
        assert local_map["en"] == {"hello": 3, "world": 1}
        assert local_map["es"] == {"hola": 1, "mundo": 1}

    def test_cleaned_form_is_counted(self):
        local_map = aggregate_file([Record("en", 'hello, "hello" (hello)')])
        assert local_map == {"en": {"hello": 3}}

    def test_case_preserved(self):
        local_map = aggregate_file([Record("en", "Hello hello")])
        assert local_map["en"] == {"Hello": 1, "hello": 1}

    def test_noise_dropped(self):
        text = "RT @user: check https://t.co/x #tag 2024 &amp; !!! ok"
        local_map = aggregate_file([Record("en", text)])
        assert local_map == {"en": {"check": 1, "amp;": 1, "ok": 1}}

    def test_adversarial_lines_skipped(self, make_dump):
        """Nested, surrogate and broken lines drop out; the rest of the file counts."""
        path = make_dump(
            "mixed.bz2",
            [{"lang": "en", "text": "hello hello"}],
            extra_lines=[
                "[" * 100000,
                '{"lang": "en", "text": "\\ud83dabc hello"}',
                '{"lang": "en", "text": "bad \\q"}',
            ],
        )
        assert process_file(path) == {"en": {"hello": 2}}

    def test_link_after_newline_not_counted(self):
        local_map = aggregate_file([Record("en", "Check this\nhttps://t.co/abc now")])
        assert local_map == {"en": {"Check": 1, "now": 1}}

    def test_language_without_words(self):
        local_map = aggregate_file([Record("und", "@a #b")])
        assert local_map == {"und": {}}

    def test_process_file(self, make_dump):
        path = make_dump(
            "x.bz2",
            [{"lang": "en", "text": "alpha beta"}, {"lang": "en", "text": "alpha"}],
        )
        assert process_file(path) == {"en": {"alpha": 2, "beta": 1}}
