from pathlib import Path
from typing import Protocol


class StylesheetCompiler(Protocol):
    def compile(self, source: str, origin: Path) -> str: ...
