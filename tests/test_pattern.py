"""Tests for ignorewalk.pattern."""

from __future__ import annotations

import pytest

from ignorewalk import InvalidPatternError
from ignorewalk.pattern import CompiledPattern, coerce_pattern, compile_pattern, compile_patterns, first_wildcard


class TestCompilePattern:
    @pytest.mark.parametrize(
        ("raw", "pattern", "negated", "directory_only", "no_directory"),
        [
            ("*.log", "*.log", False, False, True),
            ("!important.log", "important.log", True, False, True),
            ("node_modules/", "node_modules", False, True, True),
            ("!.git/", ".git", True, True, True),
            ("/build", "/build", False, False, False),
            ("views/*.php", "views/*.php", False, False, False),
            ("/docs/build/", "/docs/build", False, True, False),
            ("", "", False, False, True),
            ("!", "", True, False, True),
        ],
    )
    def test_flags(
        self,
        raw: str,
        pattern: str,
        negated: bool,
        directory_only: bool,
        no_directory: bool,
    ) -> None:
        compiled = compile_pattern(raw)
        assert compiled.pattern == pattern
        assert compiled.negated is negated
        assert compiled.directory_only is directory_only
        assert compiled.no_directory is no_directory

    @pytest.mark.parametrize(
        ("raw", "offset"),
        [
            ("README", None),
            ("*.txt", 0),
            ("a?c", 1),
            ("src/[ab].py", 4),
            ("foo\\*bar", 3),
            ("/build*", 6),
            ("", None),
        ],
    )
    def test_first_wildcard_offset(self, raw: str, offset: int | None) -> None:
        assert compile_pattern(raw).first_wildcard == offset

    def test_first_wildcard_is_byte_offset(self) -> None:
        # "é" is two bytes in UTF-8
        assert compile_pattern("é*").first_wildcard == 2

    @pytest.mark.parametrize(
        ("raw", "ends_with_literal"),
        [
            ("*.txt", True),
            ("*", True),
            ("*.t?t", False),
            ("**.txt", False),
            ("a*.txt", False),
            ("plain", False),
            ("", False),
        ],
    )
    def test_ends_with_literal(self, raw: str, ends_with_literal: bool) -> None:
        compiled = compile_pattern(raw)
        assert compiled.ends_with_literal is ends_with_literal
        if compiled.ends_with_literal:
            assert compiled.pattern.startswith("*")
            assert first_wildcard(compiled.pattern[1:].encode()) is None

    def test_anchored_property(self) -> None:
        assert compile_pattern("/build").anchored is True
        assert compile_pattern("build").anchored is False

    @pytest.mark.parametrize(
        "raw",
        ["*.log", "!important.log", "node_modules/", "!/build/", "/a/b", "", "!", "/", "//", "a\\!b"],
    )
    def test_round_trip(self, raw: str) -> None:
        assert compile_pattern(raw).to_text() == raw

    def test_compiled_pattern_is_immutable(self) -> None:
        compiled = compile_pattern("*.log")
        with pytest.raises(AttributeError):
            compiled.negated = True  # type: ignore[misc]

    @pytest.mark.parametrize("value", [None, 42, b"*.log", ["*.log"]])
    def test_non_string_raises(self, value: object) -> None:
        with pytest.raises(InvalidPatternError, match="must be a string"):
            compile_pattern(value)  # type: ignore[arg-type]


class TestCoercePattern:
    def test_string_is_compiled(self) -> None:
        assert coerce_pattern("!*.log") == compile_pattern("!*.log")

    def test_compiled_pattern_passes_through(self) -> None:
        compiled = compile_pattern("build/")
        assert coerce_pattern(compiled) is compiled

    def test_complete_mapping_is_accepted(self) -> None:
        record = {
            "pattern": "*.log",
            "negated": False,
            "directory_only": False,
            "no_directory": True,
            "ends_with_literal": True,
            "first_wildcard": 0,
        }
        assert coerce_pattern(record) == compile_pattern("*.log")

    def test_incomplete_mapping_raises(self) -> None:
        with pytest.raises(InvalidPatternError, match="missing first_wildcard"):
            coerce_pattern({"pattern": "*.log", "negated": False, "directory_only": False,
                            "no_directory": True, "ends_with_literal": True})

    def test_malformed_mapping_raises(self) -> None:
        record = {
            "pattern": 5,
            "negated": False,
            "directory_only": False,
            "no_directory": True,
            "ends_with_literal": False,
            "first_wildcard": None,
        }
        with pytest.raises(InvalidPatternError, match="Malformed"):
            coerce_pattern(record)

    def test_other_types_raise(self) -> None:
        with pytest.raises(InvalidPatternError):
            coerce_pattern(3.5)  # type: ignore[arg-type]


class TestCompilePatterns:
    def test_preserves_order(self) -> None:
        compiled = compile_patterns(["*.log", "!important.log"])
        assert [p.to_text() for p in compiled] == ["*.log", "!important.log"]

    def test_none_is_empty(self) -> None:
        assert compile_patterns(None) == ()

    def test_single_string_is_rejected(self) -> None:
        with pytest.raises(InvalidPatternError, match="not a single string"):
            compile_patterns("*.log")

    def test_mixed_inputs(self) -> None:
        existing = CompiledPattern(pattern="a", no_directory=True)
        compiled = compile_patterns([existing, "b/"])
        assert compiled[0] is existing
        assert compiled[1].directory_only is True
