from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from lesscpy.lessc.formatter import Formatter
from lesscpy.lessc.parser import LessParser

from lessbuild.errors import CompileError

logger = logging.getLogger(__name__)

_LINE_RE = re.compile(r"line:?\s*(\d+)", re.IGNORECASE)


class _NamedSource(io.StringIO):
    """In-memory source carrying the path lesscpy resolves ``@import`` against."""

    def __init__(self, text: str, name: str) -> None:
        super().__init__(text)
        self.name = name


@dataclass
class _FormatOptions:
    tabs: bool = False
    spaces: bool = True
    minify: bool = False
    xminify: bool = False


def _line_from_message(message: str) -> int | None:
    match = _LINE_RE.search(message)
    return int(match.group(1)) if match else None


def _compile_error(exc: Exception, origin: Path) -> CompileError:
    message = str(exc) or exc.__class__.__name__
    return CompileError(message, source=origin, line=_line_from_message(message))


class LesscpyCompiler:
    """Compile LESS text to CSS with ``lesscpy``.

    Implements the ``StylesheetCompiler`` protocol. Output is always the
    readable form; compaction is left to the artifact writer.

    A non-empty source that leaves lesscpy without a parse tree (input
    ending inside a block) is reported as a ``CompileError``.
    """

    def __init__(self, tabs: bool = False, spaces: bool = True) -> None:
        self._options = _FormatOptions(tabs=tabs, spaces=spaces)

    def compile(self, source: str, origin: Path) -> str:
        logger.debug("Compiling %s", origin)
        try:
            parser = LessParser(fail_with_exc=True)
            parser.parse(file=_NamedSource(source, str(origin)))
        except Exception as exc:
            raise _compile_error(exc, origin) from exc

        if parser.result is None:
            if source.strip():
                raise CompileError("unexpected end of input", source=origin)
            return ""

        try:
            return Formatter(self._options).format(parser)
        except Exception as exc:
            raise _compile_error(exc, origin) from exc
