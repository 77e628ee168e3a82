"""Tests for resolve.py: pattern/replacement from arguments or files."""

import pytest

from rp.errors import ConfigError, ConflictingArguments, IoError, MissingRequiredValue
from rp.resolve import check_exclusive, read_text, resolve


class TestResolve:
    def test_literal(self):
        assert resolve("pattern", "a+b", None) == "a+b"

    def test_empty_literal_is_kept(self):
        assert resolve("pattern", "", None) == ""

    def test_literal_wins_over_file(self, tmp_path):
        f = tmp_path / "pat.txt"
        f.write_text("from file")
        assert resolve("pattern", "literal", str(f)) == "literal"

    def test_file_contents_untrimmed(self, tmp_path):
        f = tmp_path / "pat.txt"
        f.write_text("foo(bar)\n\n  ")
        assert resolve("pattern", None, str(f)) == "foo(bar)\n\n  "

    def test_file_line_endings_preserved(self, tmp_path):
        f = tmp_path / "rep.txt"
        f.write_bytes(b"a\r\nb\r\n")
        assert resolve("replacement", None, str(f)) == "a\r\nb\r\n"

    def test_missing(self):
        with pytest.raises(MissingRequiredValue) as exc:
            resolve("replacement", None, None)
        assert exc.value.name == "replacement"
        assert exc.value.message == "No replacement was supplied"
        assert isinstance(exc.value, ConfigError)

    def test_unreadable_file(self, tmp_path):
        missing = tmp_path / "nope.txt"
        with pytest.raises(IoError) as exc:
            resolve("pattern", None, str(missing))
        assert exc.value.path == str(missing)
        assert str(missing) in exc.value.message
        assert "No such file" in exc.value.message


class TestReadText:
    def test_invalid_utf8(self, tmp_path):
        f = tmp_path / "bin.dat"
        f.write_bytes(b"\xff\xfe\x00abc")
        with pytest.raises(IoError) as exc:
            read_text(str(f))
        assert exc.value.kind == "io"
        assert isinstance(exc.value.cause, UnicodeDecodeError)

    def test_directory(self, tmp_path):
        with pytest.raises(IoError):
            read_text(str(tmp_path))


class TestCheckExclusive:
    def test_both_set(self):
        with pytest.raises(ConflictingArguments, match="mutually exclusive"):
            check_exclusive("a", "file.txt", "--pattern", "--pattern-file")

    def test_empty_literal_still_conflicts(self):
        with pytest.raises(ConflictingArguments):
            check_exclusive("", "file.txt", "--pattern", "--pattern-file")

    @pytest.mark.parametrize("literal, path", [("a", None), (None, "f"), (None, None)])
    def test_ok(self, literal, path):
        check_exclusive(literal, path, "--pattern", "--pattern-file")
