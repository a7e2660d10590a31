import sys
from pathlib import Path

import pytest

# Układ płaski: pakiety leżą w katalogu głównym repozytorium.
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())

from guide_model import CodeExample, ExampleLabel  # noqa: E402

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture
def guide_path() -> Path:
    """Przewodnik testowy z parami Bad:/Better: dla każdej reguły."""
    return DATA_DIR / "unit_testing_guide.md"


@pytest.fixture
def guide_text(guide_path: Path) -> str:
    return guide_path.read_text(encoding="utf-8")


def make_example(
    source: str,
    label: ExampleLabel = ExampleLabel.BETTER,
    section_title: str = "Section",
    language: str = "csharp",
    section_index: int = 0,
    index: int = 0,
) -> CodeExample:
    return CodeExample(
        source=source,
        label=label,
        section_title=section_title,
        section_index=section_index,
        index=index,
        language=language,
        line=1,
    )


@pytest.fixture
def example_factory():
    """Fabryka CodeExample do testów reguł i ewaluatora."""
    return make_example
