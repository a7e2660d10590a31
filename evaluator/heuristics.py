"""
evaluator/heuristics.py — strukturalna analiza fragmentu kodu testu.

Nie parsujemy języka — wystarczą heurystyki liniowe na kodzie, z którego
zamaskowano literały i komentarze (scan_c_family / scan_python). Maskowanie
zachowuje długości i znaki nowej linii, więc numery linii się zgadzają.

Rodziny składni:
  c-family — C#, Java, JS/TS, C++ (klamry, //, /* */, "..." @"..." $"...")
  python   — wcięcia, #, '...', "...", trójcudzysłowy

Snippet to jedyny punkt wejścia dla reguł z catalog.py.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from guide_model import CodeExample

_PY_LANGS = {"python", "py", "python3", "pycon", "pytest"}

_PY_DEF_RE = re.compile(r"^\s*(?:async\s+)?def\s+\w+\s*\(.*\)\s*(?:->.*)?:\s*$", re.MULTILINE)

# Otwarcie literału C#: "...", @"...", $"...", $@"...", @$"..."
_C_STR_OPEN_RE = re.compile(r'(?:\$@|@\$|@|\$)?"')

# Literał znakowy: 'a', '\n', '\''
_C_CHAR_RE = re.compile(r"'(?:\\.|[^'\\\n])'")

# Otwarcie literału Pythona: ''' """ ' "
_PY_STR_OPEN_RE = re.compile(r"'''|\"\"\"|'|\"")

# Atrybuty / adnotacje metod testowych: [Fact], [Theory], [Test], @Test ...
_TEST_ATTR_RE = re.compile(
    r"^\s*(?:\[\s*(?:Fact|Theory|Test|TestMethod|DataTestMethod|TestCase)\b"
    r"|@(?:Test|ParameterizedTest|RepeatedTest)\b)"
)
_ATTR_LINE_RE = re.compile(r"^\s*(?:\[.*\]|@\w[\w.]*(?:\(.*\))?)\s*$")

_C_MODIFIERS = r"(?:(?:public|private|protected|internal|static|async|virtual|override|final|sealed)\s+)*"

# Sygnatura metody C-family; grupa 1 = nazwa.
_C_METHOD_RE = re.compile(
    r"^\s*" + _C_MODIFIERS
    + r"(?:void|Task(?:<[^>]*>)?|[A-Z]\w*(?:<[^>]*>)?(?:\[\])?)\s+([A-Za-z_]\w*)\s*\("
)
# Jak wyżej, ale tylko void / Task (fragmenty bez atrybutów testowych).
_C_VOID_METHOD_RE = re.compile(
    r"^\s*" + _C_MODIFIERS + r"(?:void|Task)\s+([A-Za-z_]\w*)\s*\("
)

_PY_METHOD_RE = re.compile(r"^(\s*)(?:async\s+)?def\s+([A-Za-z_]\w*)\s*\(")

# Komentarz znacznika fazy: "// Arrange", "# Act & Assert", "/* Assert */"
_COMMENT_TEXT_RE = re.compile(r"^\s*(?://+|#+|/\*+|\*+)\s*(.*?)\s*(?:\*+/)?\s*$")
_PHASE_TEXT_RE = re.compile(
    r"^(?:arrange|act|assert)"
    r"(?:\s*(?:&|and|\+|/|,)\s*(?:arrange|act|assert))*\s*[:.]?$",
    re.IGNORECASE,
)
_PHASE_WORD_RE = re.compile(r"arrange|act|assert", re.IGNORECASE)

_ASSERT_HELPER_RE = re.compile(
    r"\b(?:Assert|CollectionAssert|StringAssert|ClassicAssert)\.\w+"
    r"|\.Should\(\)"
    r"|\.Verify\w*\s*\("
    r"|\bexpect\s*\("
    r"|\bassert(?:Equals|True|False|That|Null|NotNull|Throws|Raises|Same|In|Is)\w*\s*\("
    r"|\bself\.assert\w+"
    r"|\bpytest\.raises\b"
    r"|\.assert_\w+\s*\("
)
_BARE_ASSERT_RE = re.compile(
    r"^\s*assert\b(?!_)"
    r"|\b(?:Debug|Trace)\.Assert\s*\("
    r"|(?<![\w.])assert\s*\("
)


# ---------------------------------------------------------------------------
# Skanowanie literałów i komentarzy
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class ScanResult:
    """
    Wynik skanowania fragmentu.

    - code:     kod z zamaskowaną treścią literałów i komentarzy (spacje)
    - literals: (0-based linia, treść) dla każdego literału napisowego
    - balanced: False gdy literał lub komentarz nie został zamknięty
    """

    code: str
    literals: list[tuple[int, str]] = field(default_factory=list)
    balanced: bool = True


def _mask(text: str) -> str:
    return "".join("\n" if c == "\n" else " " for c in text)


def scan_c_family(source: str) -> ScanResult:
    out: list[str] = []
    result = ScanResult(code="")
    i, n, line = 0, len(source), 0

    while i < n:
        ch = source[i]

        if source.startswith("//", i):
            j = source.find("\n", i)
            j = n if j == -1 else j
            out.append(" " * (j - i))
            i = j
            continue

        if source.startswith("/*", i):
            j = source.find("*/", i + 2)
            if j == -1:
                result.balanced = False
                j = n
            else:
                j += 2
            chunk = source[i:j]
            out.append(_mask(chunk))
            line += chunk.count("\n")
            i = j
            continue

        m = _C_STR_OPEN_RE.match(source, i) if ch in '"@$' else None
        if m:
            verbatim = "@" in m.group()
            j = start = m.end()
            while j < n:
                c = source[j]
                if verbatim:
                    if c == '"':
                        if source.startswith('""', j):
                            j += 2
                            continue
                        break
                elif c == "\\":
                    j += 2
                    continue
                elif c in '"\n':
                    break
                j += 1
            j = min(j, n)
            closed = j < n and source[j] == '"'
            if not closed:
                result.balanced = False
            text = source[start:j]
            result.literals.append((line, text))
            out.append(m.group() + _mask(text) + ('"' if closed else ""))
            line += text.count("\n")
            i = j + 1 if closed else j
            continue

        if ch == "'":
            m = _C_CHAR_RE.match(source, i)
            if m:
                out.append("'" + _mask(m.group()[1:-1]) + "'")
                i = m.end()
                continue

        out.append(ch)
        if ch == "\n":
            line += 1
        i += 1

    result.code = "".join(out)
    return result


def scan_python(source: str) -> ScanResult:
    out: list[str] = []
    result = ScanResult(code="")
    i, n, line = 0, len(source), 0

    while i < n:
        ch = source[i]

        if ch == "#":
            j = source.find("\n", i)
            j = n if j == -1 else j
            out.append(" " * (j - i))
            i = j
            continue

        m = _PY_STR_OPEN_RE.match(source, i) if ch in "'\"" else None
        if m:
            quote = m.group()
            j = start = m.end()
            closed = False
            while j < n:
                c = source[j]
                if c == "\\":
                    j += 2
                    continue
                if source.startswith(quote, j):
                    closed = True
                    break
                if c == "\n" and len(quote) == 1:
                    break
                j += 1
            j = min(j, n)
            if not closed:
                result.balanced = False
            text = source[start:j]
            result.literals.append((line, text))
            out.append(quote + _mask(text) + (quote if closed else ""))
            line += text.count("\n")
            i = j + len(quote) if closed else j
            continue

        out.append(ch)
        if ch == "\n":
            line += 1
        i += 1

    result.code = "".join(out)
    return result


def is_python(example: CodeExample) -> bool:
    """Rodzina składni z info stringu; bez niego — po sygnaturze def ...:."""
    lang = example.language.lower()
    if lang:
        return lang in _PY_LANGS
    return bool(_PY_DEF_RE.search(example.source))


# ---------------------------------------------------------------------------
# Snippet
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class TestMethod:
    name: str
    line: int              # 0-based linia sygnatury
    body: str | None       # treść ciała; None gdy klamry się nie domykają


class Snippet:
    """Fragment kodu z wynikami skanowania i pomocniczymi zapytaniami."""

    __slots__ = ("source", "python", "scan", "lines", "code_lines")

    def __init__(self, source: str, python: bool = False) -> None:
        self.source = source
        self.python = python
        self.scan = scan_python(source) if python else scan_c_family(source)
        self.lines = source.split("\n")
        self.code_lines = self.scan.code.split("\n")

    @classmethod
    def of(cls, example: CodeExample) -> "Snippet":
        return cls(example.source, python=is_python(example))

    # ------------------------------------------------------------------
    # Poprawność składniowa
    # ------------------------------------------------------------------

    @property
    def braces_balanced(self) -> bool:
        if self.python:
            return True
        depth = 0
        for c in self.scan.code:
            if c == "{":
                depth += 1
            elif c == "}":
                depth -= 1
                if depth < 0:
                    return False
        return depth == 0

    @property
    def parseable(self) -> bool:
        """Czy heurystyki strukturalne mają na czym pracować."""
        return self.scan.balanced and self.braces_balanced and bool(self.scan.code.strip())

    # ------------------------------------------------------------------
    # Fazy Arrange / Act / Assert
    # ------------------------------------------------------------------

    def phases(self) -> list[tuple[int, tuple[str, ...]]]:
        """Znaczniki faz: (0-based linia, fazy nazwane w komentarzu)."""
        found: list[tuple[int, tuple[str, ...]]] = []
        for idx, raw in enumerate(self.lines):
            m = _COMMENT_TEXT_RE.match(raw)
            if not m:
                continue
            text = m.group(1)
            if _PHASE_TEXT_RE.match(text):
                words = tuple(w.lower() for w in _PHASE_WORD_RE.findall(text))
                found.append((idx, words))
        return found

    def phase_marker(self, phase: str) -> tuple[str, ...] | None:
        """Fazy nazwane przez pierwszy znacznik zawierający `phase`."""
        for _, words in self.phases():
            if phase in words:
                return words
        return None

    def phase_segment(self, phase: str) -> list[int] | None:
        """
        Linie (0-based) od znacznika fazy do następnego znacznika.
        None gdy znacznika fazy nie ma.
        """
        markers = self.phases()
        for pos, (idx, words) in enumerate(markers):
            if phase in words:
                end = markers[pos + 1][0] if pos + 1 < len(markers) else len(self.lines)
                return list(range(idx + 1, end))
        return None

    # ------------------------------------------------------------------
    # Metody testowe
    # ------------------------------------------------------------------

    def test_methods(self) -> list[TestMethod]:
        if self.python:
            return self._python_methods()
        return self._c_methods()

    def _c_methods(self) -> list[TestMethod]:
        attributed = any(_TEST_ATTR_RE.match(l) for l in self.code_lines)
        methods: list[TestMethod] = []
        pending_attr = False
        for idx, line in enumerate(self.code_lines):
            if _TEST_ATTR_RE.match(line):
                pending_attr = True
                continue
            if pending_attr and (not line.strip() or _ATTR_LINE_RE.match(line)):
                continue
            if attributed:
                m = _C_METHOD_RE.match(line) if pending_attr else None
            else:
                m = _C_VOID_METHOD_RE.match(line)
            pending_attr = False
            if m:
                methods.append(TestMethod(m.group(1), idx, self._c_body(idx)))
        return methods

    def _c_body(self, line_idx: int) -> str | None:
        code = self.scan.code
        offset = sum(len(l) + 1 for l in self.code_lines[:line_idx])
        open_pos = code.find("{", offset)
        stop = code.find(";", offset)
        if open_pos == -1 or (stop != -1 and stop < open_pos):
            # Metoda z ciałem wyrażeniowym (=>) lub deklaracja bez ciała.
            end = stop if stop != -1 else len(code)
            arrow = code.find("=>", offset, end)
            return code[arrow + 2:end] if arrow != -1 else ""
        depth = 0
        for pos in range(open_pos, len(code)):
            c = code[pos]
            if c == "{":
                depth += 1
            elif c == "}":
                depth -= 1
                if depth == 0:
                    return code[open_pos + 1:pos]
        return None

    def _python_methods(self) -> list[TestMethod]:
        defs: list[tuple[int, int, str]] = []
        for idx, line in enumerate(self.code_lines):
            m = _PY_METHOD_RE.match(line)
            if m:
                defs.append((idx, len(m.group(1)), m.group(2)))
        tests = [d for d in defs if d[2].startswith("test")] or defs
        methods: list[TestMethod] = []
        for idx, indent, name in tests:
            body: list[str] = []
            for line in self.code_lines[idx + 1:]:
                if line.strip() and len(line) - len(line.lstrip()) <= indent:
                    break
                body.append(line)
            methods.append(TestMethod(name, idx, "\n".join(body)))
        return methods

    def bodies(self) -> list[str | None]:
        """Ciała metod testowych; bez metod — cały kod fragmentu."""
        methods = self.test_methods()
        if not methods:
            return [self.scan.code]
        return [m.body for m in methods]

    # ------------------------------------------------------------------
    # Asercje
    # ------------------------------------------------------------------

    def assertion_lines(self) -> list[int]:
        """Linie (0-based) zawierające jakąkolwiek asercję."""
        return [
            idx for idx, line in enumerate(self.code_lines)
            if _ASSERT_HELPER_RE.search(line) or _BARE_ASSERT_RE.search(line)
        ]

    def bare_assertion_lines(self) -> list[int]:
        return [
            idx for idx, line in enumerate(self.code_lines)
            if _BARE_ASSERT_RE.search(line)
        ]

    def is_assertion(self, idx: int) -> bool:
        line = self.code_lines[idx]
        return bool(_ASSERT_HELPER_RE.search(line) or _BARE_ASSERT_RE.search(line))
