"""Tests for the lesscpy compiler adapter."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from lessbuild.compiler.lesscpy_adapter import LesscpyCompiler, _line_from_message, _NamedSource
from lessbuild.core.ports.compiler import StylesheetCompiler
from lessbuild.errors import CompileError
from tests.conftest import write_source


class TestLineFromMessage:
    def test_extracts_line_number(self) -> None:
        assert _line_from_message("screen.less: line: 12: unexpected '}'") == 12

    def test_returns_none_without_line(self) -> None:
        assert _line_from_message("something broke") is None


class TestNamedSource:
    def test_carries_name_and_text(self) -> None:
        stream = _NamedSource("a{}", "/tmp/screen.less")
        assert stream.name == "/tmp/screen.less"
        assert stream.read() == "a{}"


class TestLesscpyCompiler:
    def test_implements_protocol(self) -> None:
        compiler: StylesheetCompiler = LesscpyCompiler()
        assert hasattr(compiler, "compile")

    def test_compiles_plain_rule(self, tmp_path: Path) -> None:
        css = LesscpyCompiler().compile("a { color: red; }\n", tmp_path / "screen.less")
        assert "color: red" in css

    def test_empty_source_compiles_to_empty_css(self, tmp_path: Path) -> None:
        assert LesscpyCompiler().compile("", tmp_path / "screen.less") == ""

    @pytest.mark.parametrize(
        "source",
        ["body { color: red;\n", "a { color: red; } b {"],
        ids=["unclosed-block", "valid-rule-then-unclosed"],
    )
    def test_truncated_source_raises(self, tmp_path: Path, source: str) -> None:
        origin = tmp_path / "screen.less"
        with pytest.raises(CompileError, match="unexpected end of input") as excinfo:
            LesscpyCompiler().compile(source, origin)
        assert excinfo.value.source == origin

    def test_imports_partial_next_to_origin(self, tmp_path: Path) -> None:
        write_source(tmp_path, "_vars.less", "@brand: red;\n")
        origin = write_source(tmp_path, "screen.less", '@import "_vars.less";\nbody { color: @brand; }\n')

        css = LesscpyCompiler().compile(origin.read_text(encoding="utf-8"), origin)

        assert "color: red" in css
        assert "@brand" not in css

    def test_missing_import_raises(self, tmp_path: Path) -> None:
        origin = tmp_path / "screen.less"
        with pytest.raises(CompileError, match="Cannot import"):
            LesscpyCompiler().compile('@import "_missing.less";\nbody { color: red; }\n', origin)

    def test_formats_with_configured_options(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        seen: dict[str, Any] = {}

        class _Parser:
            result: Any = ["rule"]

            def __init__(self, **kwargs: Any) -> None:
                seen["parser_kwargs"] = kwargs

            def parse(self, file: Any) -> None:
                seen["name"] = file.name
                seen["text"] = file.read()

        class _Formatter:
            def __init__(self, options: Any) -> None:
                seen["tabs"] = options.tabs
                seen["minify"] = options.minify

            def format(self, parser: Any) -> str:
                return "a{}"

        monkeypatch.setattr("lessbuild.compiler.lesscpy_adapter.LessParser", _Parser)
        monkeypatch.setattr("lessbuild.compiler.lesscpy_adapter.Formatter", _Formatter)
        origin = tmp_path / "screen.less"

        assert LesscpyCompiler(tabs=True).compile("a {}", origin) == "a{}"
        assert seen == {
            "parser_kwargs": {"fail_with_exc": True},
            "name": str(origin),
            "text": "a {}",
            "tabs": True,
            "minify": False,
        }

    def test_wraps_parser_failures(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        class _FailingParser:
            def __init__(self, **kwargs: Any) -> None:
                pass

            def parse(self, file: Any) -> None:
                raise SyntaxError("screen.less: line: 3: unexpected token")

        monkeypatch.setattr("lessbuild.compiler.lesscpy_adapter.LessParser", _FailingParser)
        origin = tmp_path / "screen.less"
        with pytest.raises(CompileError) as excinfo:
            LesscpyCompiler().compile("a {", origin)

        assert excinfo.value.source == origin
        assert excinfo.value.line == 3
        assert isinstance(excinfo.value.__cause__, SyntaxError)
        assert str(excinfo.value).startswith(f"{origin}:3:")
