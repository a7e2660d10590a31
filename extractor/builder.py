"""
extractor/builder.py — składanie Document z sekwencji zdarzeń parsera.

Parsery (Markdown i HTML) przechodzą źródło i wołają:
  start_section(title, level) — nowy nagłówek
  add_prose(text)             — linia / blok prozy
  add_code(source, ...)       — zamknięty region kodu

Etykieta przykładu pochodzi z ostatniej niepustej linii prozy między
poprzednim regionem kodu tej sekcji (albo początkiem sekcji) a bieżącym.
"""

from __future__ import annotations

from guide_model import CodeExample, Document, ExampleLabel, Section

from .label_patterns import match_label


class _SectionDraft:
    __slots__ = ("index", "title", "level", "prose", "examples", "pending")

    def __init__(self, index: int, title: str, level: int) -> None:
        self.index = index
        self.title = title
        self.level = level
        self.prose: list[str] = []
        self.examples: list[CodeExample] = []
        self.pending: list[str] = []   # proza od ostatniego regionu kodu

    def is_empty(self) -> bool:
        return not self.examples and not any(p.strip() for p in self.prose)

    def freeze(self) -> Section:
        return Section(
            index=self.index,
            title=self.title,
            level=self.level,
            body="\n".join(self.prose).strip("\n"),
            examples=tuple(self.examples),
        )


class DocumentBuilder:
    """Zbiera sekcje i przykłady w kolejności dokumentu."""

    def __init__(self) -> None:
        self._sections: list[Section] = []
        # Część przed pierwszym nagłówkiem; zachowywana tylko gdy niepusta.
        self._current = _SectionDraft(index=0, title="", level=0)

    @property
    def current_title(self) -> str:
        return self._current.title

    def start_section(self, title: str, level: int) -> None:
        self._close_current()
        self._current = _SectionDraft(
            index=len(self._sections), title=title, level=level
        )

    def add_prose(self, text: str) -> None:
        self._current.prose.append(text)
        self._current.pending.append(text)

    def add_code(self, source: str, language: str = "", line: int = 0) -> CodeExample:
        draft = self._current
        example = CodeExample(
            source=source,
            label=self._label_from(draft.pending),
            section_title=draft.title,
            section_index=draft.index,
            index=len(draft.examples),
            language=language,
            line=line,
        )
        draft.examples.append(example)
        draft.pending = []
        return example

    def build(self, source: str) -> Document:
        self._close_current()
        return Document(sections=tuple(self._sections), source=source)

    def _close_current(self) -> None:
        draft = self._current
        if draft.level == 0 and draft.is_empty():
            return
        self._sections.append(draft.freeze())

    @staticmethod
    def _label_from(pending: list[str]) -> ExampleLabel:
        for text in reversed(pending):
            if text.strip():
                return match_label(text) or ExampleLabel.NEUTRAL
        return ExampleLabel.NEUTRAL
