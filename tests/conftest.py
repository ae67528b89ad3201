"""Shared fixtures and helpers for tests."""

from pathlib import Path

import pytest

from lessbuild.core.config import ConfigResolver
from lessbuild.core.pipeline import StylesheetPipeline
from lessbuild.errors import CompileError

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag every test under tests/unit as "unit"
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# FakeCompiler: stands in for lesscpy in pipeline tests
# ---------------------------------------------------------------------------


class FakeCompiler:
    """Echo the source back as CSS; fail on sources containing ``@error``."""

    def __init__(self) -> None:
        self.calls: list[Path] = []

    def compile(self, source: str, origin: Path) -> str:
        self.calls.append(origin)
        if "@error" in source:
            raise CompileError("unexpected token '@error'", source=origin, line=1, column=1)
        return source


def write_source(root: Path, relative: str, text: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A project with one stylesheet, one partial and one nested stylesheet."""
    sources = tmp_path / "app" / "stylesheets"
    write_source(sources, "screen.less", "body{color:red}\n")
    write_source(sources, "_vars.less", "@brand: red;\n")
    write_source(sources, "admin/forms.lss", "form {\n  margin: 0;\n}\n")
    return tmp_path


@pytest.fixture
def source_root(project_root: Path) -> Path:
    return project_root / "app" / "stylesheets"


@pytest.fixture
def fake_compiler() -> FakeCompiler:
    return FakeCompiler()


@pytest.fixture
def production_resolver(project_root: Path) -> ConfigResolver:
    return ConfigResolver("production", project_root)


@pytest.fixture
def development_resolver(project_root: Path) -> ConfigResolver:
    return ConfigResolver("development", project_root)


@pytest.fixture
def pipeline(production_resolver: ConfigResolver, fake_compiler: FakeCompiler) -> StylesheetPipeline:
    return StylesheetPipeline(production_resolver, fake_compiler)
