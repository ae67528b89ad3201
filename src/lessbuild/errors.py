"""Exceptions raised by the stylesheet build pipeline.

Filesystem failures are not wrapped: they surface as the built-in
``OSError`` family so callers can handle them the usual way.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class LessBuildError(Exception):
    """Base class for pipeline errors."""


class NotFoundError(LessBuildError):
    """A slug does not resolve to a compilable source file."""

    def __init__(self, slug: object) -> None:
        super().__init__(f"No stylesheet source found for '{slug}'")
        self.slug = slug


class CompileError(LessBuildError):
    """The stylesheet compiler rejected a source file."""

    def __init__(
        self,
        message: str,
        source: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.message = message
        self.source = source
        self.line = line
        self.column = column
        super().__init__(self._describe())

    def _describe(self) -> str:
        location = str(self.source) if self.source else "<source>"
        if self.line is not None:
            location += f":{self.line}"
            if self.column is not None:
                location += f":{self.column}"
        return f"{location}: {self.message}"


class AmbiguousSourceError(LessBuildError):
    """More than one accepted extension matches the same slug."""

    def __init__(self, slug: object, candidates: Sequence[Path]) -> None:
        names = ", ".join(str(c) for c in candidates)
        super().__init__(f"Slug '{slug}' matches several sources: {names}")
        self.slug = slug
        self.candidates = list(candidates)
