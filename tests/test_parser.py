"""Tests for digest file parsing."""

from pathlib import Path

import pytest

from xsum.exceptions import ParseError, ReadError
from xsum.parser import DigestParser, parse_digest_text
from xsum.types import ChecksumEntry, HashMode

SHA256_A = "6ae8a75555209fd6c44157c0aed8016e763ff435a19cf186f76863140143ff72"
SHA256_B = "0000000000000000000000000000000000000000000000000000000000000000"


class TestParseDigestText:
    """Tests for parse_digest_text()."""

    def test_keys_match_listed_filenames(self) -> None:
        text = f"{SHA256_A} *app.bin\n{SHA256_B}  notes.txt\n"

        table = parse_digest_text(text)

        assert set(table) == {"app.bin", "notes.txt"}
        assert table["app.bin"] == ChecksumEntry(SHA256_A, is_binary=True)
        assert table["notes.txt"] == ChecksumEntry(SHA256_B, is_binary=False)

    def test_marker_sets_mode(self) -> None:
        table = parse_digest_text("abc123 *file1.bin\ndef456  file2.txt")

        assert table["file1.bin"].mode is HashMode.BINARY
        assert table["file2.txt"].mode is HashMode.TEXT

    def test_duplicate_filename_last_one_wins(self) -> None:
        text = "aaaa *dup.bin\nbbbb  other\ncccc  dup.bin"

        table = parse_digest_text(text)

        assert len(table) == 2
        assert table["dup.bin"] == ChecksumEntry("cccc", is_binary=False)

    def test_filename_keeps_spaces(self) -> None:
        table = parse_digest_text("abcd  my file name.txt ")

        # Only the whole text is stripped, so the trailing space goes too
        assert list(table) == ["my file name.txt"]

    def test_filename_rest_is_not_trimmed(self) -> None:
        table = parse_digest_text("abcd   leading.txt\nef01  last")

        assert " leading.txt" in table

    def test_uppercase_hex_accepted(self) -> None:
        table = parse_digest_text("ABCDEF0123 *upper.bin")

        assert table["upper.bin"].digest_hex == "ABCDEF0123"

    def test_crlf_and_blank_lines_collapse(self) -> None:
        text = "\r\n\r\naaaa  one\r\n\r\n\r\nbbbb *two\r\n\n"

        table = parse_digest_text(text)

        assert set(table) == {"one", "two"}

    def test_lone_carriage_return_separates_lines(self) -> None:
        table = parse_digest_text("aaaa  one\rbbbb  two")

        assert set(table) == {"one", "two"}

    def test_filename_with_star_in_text_mode(self) -> None:
        # Marker is the space, the star belongs to the filename
        table = parse_digest_text("abcd  *starred")

        assert table["*starred"].is_binary is False

    def test_leading_byte_order_mark_ignored(self) -> None:
        table = parse_digest_text(f"\ufeff{SHA256_A} *a.bin\r\n")

        assert table["a.bin"] == ChecksumEntry(SHA256_A, is_binary=True)

    def test_table_is_read_only(self) -> None:
        table = parse_digest_text("abcd  file")

        with pytest.raises(TypeError):
            table["file"] = ChecksumEntry("ef", is_binary=True)  # type: ignore[index]


class TestParseErrors:
    """Tests for ParseError reporting."""

    def test_non_hex_digest(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_digest_text("zz 1gar bage")

        assert exc_info.value.line_number == 1
        assert exc_info.value.line == "zz 1gar bage"

    def test_reports_first_offending_line(self) -> None:
        text = "aaaa  one\nbbbb *two\nnot a digest line\nalso bad"

        with pytest.raises(ParseError) as exc_info:
            parse_digest_text(text)

        assert exc_info.value.line_number == 3
        assert exc_info.value.line == "not a digest line"

    def test_line_numbers_skip_collapsed_blank_lines(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_digest_text("aaaa  one\n\n\nbroken")

        assert exc_info.value.line_number == 2

    def test_missing_marker(self) -> None:
        # The "f" after the single space is not a marker; sha256sum writes
        # text-mode lines with two spaces ("def456  file2.txt")
        with pytest.raises(ParseError) as exc_info:
            parse_digest_text("def456 file2.txt")

        assert exc_info.value.line_number == 1

    @pytest.mark.parametrize(
        "line",
        [
            "abcd",
            "abcd ",
            "abcd *",
            "abcd\t file",
            " abcd  indented-but-not-first-line",
            "ab-cd  file",
        ],
    )
    def test_malformed_lines(self, line: str) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_digest_text(f"0123  first\n{line}\n4567  last")

        assert exc_info.value.line_number == 2

    def test_empty_text(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_digest_text("  \r\n  ")

        assert exc_info.value.line_number == 1
        assert exc_info.value.line == ""


class TestDigestParser:
    """Tests for reading digest files from disk."""

    @pytest.mark.asyncio
    async def test_parse_file(self, tmp_path: Path) -> None:
        path = tmp_path / "SUMS"
        path.write_text(f"{SHA256_A} *a.bin\n", encoding="utf-8")

        table = await DigestParser().parse_file(path)

        assert table["a.bin"].digest_hex == SHA256_A

    @pytest.mark.asyncio
    async def test_parse_file_with_byte_order_mark(
        self, tmp_path: Path
    ) -> None:
        path = tmp_path / "SUMS"
        path.write_bytes(b"\xef\xbb\xbf" + f"{SHA256_A} *a.bin\n".encode())

        table = await DigestParser().parse_file(path)

        assert list(table) == ["a.bin"]

    @pytest.mark.asyncio
    async def test_non_ascii_filename(self, tmp_path: Path) -> None:
        path = tmp_path / "SUMS"
        path.write_text("abcd  données.csv\n", encoding="utf-8")

        table = await DigestParser().parse_file(path)

        assert "données.csv" in table

    @pytest.mark.asyncio
    async def test_custom_encoding(self, tmp_path: Path) -> None:
        path = tmp_path / "SUMS"
        path.write_bytes("abcd  café.txt\n".encode("latin-1"))

        table = await DigestParser(encoding="latin-1").parse_file(path)

        assert "café.txt" in table

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path: Path) -> None:
        missing = tmp_path / "nope"

        with pytest.raises(ReadError) as exc_info:
            await DigestParser().parse_file(missing)

        assert exc_info.value.target == str(missing)
        assert isinstance(exc_info.value.cause, FileNotFoundError)

    @pytest.mark.asyncio
    async def test_undecodable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "SUMS"
        path.write_bytes(b"abcd  \xff\xfe\n")

        with pytest.raises(ReadError, match="not valid utf-8"):
            await DigestParser().parse_file(path)
