"""
evaluator/catalog.py — wbudowany katalog reguł.

Każda reguła to predykat (CodeExample) -> (bool, komunikat | None)
oparty na heurystykach z heuristics.Snippet. Predykat:
  - zwraca (False, komunikat) gdy fragment narusza regułę albo nie da się
    go przeanalizować (np. niedomknięte klamry),
  - zgłasza RuleEvaluationWarning gdy nie może ustalić stosowalności.

Tematy (topics) to fragmenty tytułów sekcji przewodnika, w których reguła
jest opisana — np. reguła AAA obowiązuje tylko w sekcji "Arranging your tests".
"""

from __future__ import annotations

import re
from typing import TypeAlias

from guide_model import Applicability, CodeExample, Rule

from .heuristics import Snippet
from .types import RuleCode, RuleEvaluationWarning

_UNPARSEABLE = "Nie można przeanalizować fragmentu (niedomknięty literał, komentarz lub klamra)."

CheckResult: TypeAlias = tuple[bool, str | None]


def _names(items: list[str]) -> str:
    return ", ".join(f"'{i}'" for i in items)


# ---------------------------------------------------------------------------
# test-name-three-parts
# ---------------------------------------------------------------------------

def check_test_name_three_parts(example: CodeExample) -> CheckResult:
    snippet = Snippet.of(example)
    if snippet.python:
        raise RuleEvaluationWarning(
            "Konwencja Metoda_Scenariusz_Oczekiwanie nie dotyczy nazw snake_case."
        )
    methods = snippet.test_methods()
    if not methods:
        raise RuleEvaluationWarning("Brak metody testowej — nie można ocenić nazwy.")

    bad = [
        m.name for m in methods
        if len(parts := m.name.split("_")) != 3 or not all(parts)
    ]
    if bad:
        return False, (
            f"Nazwy bez trzech części (Metoda_Scenariusz_Oczekiwanie): {_names(bad)}."
        )
    return True, None


# ---------------------------------------------------------------------------
# arrange-act-assert
# ---------------------------------------------------------------------------

_PHASE_ORDER = ("arrange", "act", "assert")


def check_arrange_act_assert(example: CodeExample) -> CheckResult:
    snippet = Snippet.of(example)
    first_seen: dict[str, int] = {}
    for order, (_, words) in enumerate(snippet.phases()):
        for word in words:
            first_seen.setdefault(word, order)

    missing = [p for p in _PHASE_ORDER if p not in first_seen]
    if missing:
        return False, f"Brak znaczników faz: {', '.join(missing)}."

    positions = [first_seen[p] for p in _PHASE_ORDER]
    if positions != sorted(positions):
        return False, "Znaczniki faz nie występują w kolejności Arrange → Act → Assert."
    return True, None


# ---------------------------------------------------------------------------
# no-magic-strings
# ---------------------------------------------------------------------------

# Nazwana deklaracja, której cała prawa strona to jeden literał:
#   const string MAXIMUM_RESULT = "1001";   var input = "0,1";   NAME = "x"
_NAMED_LITERAL_RE = re.compile(
    r"^\s*(?:[\w<>\[\],.?]+\s+)*[A-Za-z_]\w*\s*(?::\s*[\w\[\]., ]+)?=\s*"
    r"(?:[$@]{1,2}|[rRbBuUfF]{1,2})?(?:\"\"\"|'''|\"|')[^\"']*(?:\"\"\"|'''|\"|')\s*[;,]?\s*$"
)
# Atrybut / dekorator z danymi testu: [InlineData("1,2")], @pytest.mark.parametrize(...)
_ATTRIBUTE_RE = re.compile(r"^\s*[\[@]")


def check_no_magic_strings(example: CodeExample) -> CheckResult:
    snippet = Snippet.of(example)
    if not snippet.scan.balanced:
        return False, _UNPARSEABLE

    magic: list[str] = []
    for line_idx, text in snippet.scan.literals:
        line = snippet.code_lines[line_idx]
        if _ATTRIBUTE_RE.match(line) or _NAMED_LITERAL_RE.match(line):
            continue
        magic.append(text)
    if magic:
        return False, f"Literały bez nazwy: {_names(magic)}."
    return True, None


# ---------------------------------------------------------------------------
# no-logic-in-tests
# ---------------------------------------------------------------------------

_LOGIC_RE = re.compile(r"\b(if|else|for|foreach|while|switch)\b")
_TERNARY_RE = re.compile(r"\s\?\s[^;]*\s:\s")


def check_no_logic_in_tests(example: CodeExample) -> CheckResult:
    snippet = Snippet.of(example)
    if not snippet.parseable:
        return False, _UNPARSEABLE

    found: list[str] = []
    for body in snippet.bodies():
        if body is None:
            return False, _UNPARSEABLE
        found.extend(m.group(1) for m in _LOGIC_RE.finditer(body))
        if _TERNARY_RE.search(body):
            found.append("?:")
    if found:
        return False, f"Logika w teście: {_names(sorted(set(found)))}."
    return True, None


# ---------------------------------------------------------------------------
# single-act
# ---------------------------------------------------------------------------

_ACTUAL_ASSIGN_RE = re.compile(r"(?<![\w.])((?:actual|result)\w*)\s*=(?![=>])", re.IGNORECASE)


def _statements(snippet: Snippet, lines: list[int]) -> int:
    count = 0
    for idx in lines:
        if snippet.is_assertion(idx):
            continue
        line = snippet.code_lines[idx]
        if snippet.python:
            count += 1 if line.strip() else 0
        else:
            count += line.count(";")
    return count


def check_single_act(example: CodeExample) -> CheckResult:
    snippet = Snippet.of(example)
    if not snippet.parseable:
        return False, _UNPARSEABLE

    segment = snippet.phase_segment("act")
    marker = snippet.phase_marker("act") or ()
    # Wspólny znacznik Arrange & Act: fazę Act wskazują przypisania actual/result.
    if segment is not None and "arrange" not in marker:
        count = _statements(snippet, segment)
        if count > 1:
            return False, f"Faza Act zawiera {count} instrukcje — oczekiwano jednej."
        return True, None

    names = [m.group(1) for m in _ACTUAL_ASSIGN_RE.finditer(snippet.scan.code)]
    if not names:
        raise RuleEvaluationWarning(
            "Brak znacznika Act i przypisań actual/result — nie można wskazać fazy Act."
        )
    if len(names) > 1:
        return False, f"Wiele wywołań Act: {_names(names)}."
    return True, None


# ---------------------------------------------------------------------------
# prefer-helper-methods
# ---------------------------------------------------------------------------

_SETUP_ATTR_RE = re.compile(
    r"\[\s*(SetUp|OneTimeSetUp|TestInitialize|ClassInitialize|TearDown|TestCleanup)\s*\]"
    r"|@(BeforeEach|BeforeAll|Before|After|AfterEach)\b"
)
_SETUP_CALL_RE = re.compile(
    r"\b(setUp|tearDown|setup_method|setup_class|teardown_method|beforeEach|afterEach)\s*\("
)
# Bezparametrowy konstruktor klasy testowej: "public StringCalculatorTests()"
_CONSTRUCTOR_RE = re.compile(
    r"^\s*(?:public|protected|internal|private)\s+(?:static\s+)?([A-Z]\w*)\s*\(\s*\)\s*(?:\{.*)?$"
)


def check_prefer_helper_methods(example: CodeExample) -> CheckResult:
    snippet = Snippet.of(example)
    code = snippet.scan.code

    found = [m.group(0).strip() for m in _SETUP_ATTR_RE.finditer(code)]
    found += [m.group(1) for m in _SETUP_CALL_RE.finditer(code)]
    if not snippet.python:
        found += [
            f"{m.group(1)}()" for line in snippet.code_lines
            if (m := _CONSTRUCTOR_RE.match(line))
        ]
    if found:
        return False, f"Wspólny setup zamiast metod pomocniczych: {_names(found)}."
    return True, None


# ---------------------------------------------------------------------------
# no-bare-assert
# ---------------------------------------------------------------------------

def check_no_bare_assert(example: CodeExample) -> CheckResult:
    snippet = Snippet.of(example)
    if not snippet.assertion_lines():
        raise RuleEvaluationWarning("Fragment nie zawiera asercji.")
    bare = snippet.bare_assertion_lines()
    if bare:
        lines = ", ".join(str(i + 1) for i in bare)
        return False, f"Gołe asercje bez helpera w liniach: {lines}."
    return True, None


# ---------------------------------------------------------------------------
# mock-naming
# ---------------------------------------------------------------------------

_DOUBLE_DECL_RE = re.compile(
    r"(?<![\w.])([A-Za-z_]\w*)\s*=\s*(?:"
    r"new\s+(?:Fake|Mock|Stub|Dummy|Spy)\w*"
    r"|new\s+Mock\s*<"
    r"|Substitute\.For\s*<"
    r"|A\.Fake\s*<"
    r"|(?:Mock|MagicMock|AsyncMock|create_autospec|mocker\.Mock|mocker\.MagicMock)\s*\("
    r")"
)


def check_mock_naming(example: CodeExample) -> CheckResult:
    snippet = Snippet.of(example)
    doubles = list(dict.fromkeys(
        m.group(1) for m in _DOUBLE_DECL_RE.finditer(snippet.scan.code)
    ))
    if not doubles:
        raise RuleEvaluationWarning("Brak dublerów testowych (fake/stub/mock).")

    asserted_text = "\n".join(snippet.code_lines[i] for i in snippet.assertion_lines())
    problems: list[str] = []
    for name in doubles:
        asserted = re.search(rf"(?<![\w]){re.escape(name)}\b", asserted_text) is not None
        lowered = name.lower()
        if "mock" in lowered and not asserted:
            problems.append(f"'{name}' nazwany jak mock, ale nie jest sprawdzany w asercji")
        elif asserted and "mock" not in lowered:
            problems.append(f"'{name}' jest sprawdzany w asercji — powinien nazywać się mock*")
    if problems:
        return False, "; ".join(problems) + "."
    return True, None


# ---------------------------------------------------------------------------
# no-static-references
# ---------------------------------------------------------------------------

_STATIC_REF_RE = re.compile(
    r"\bDateTime(?:Offset)?\.(?:Now|UtcNow|Today)\b"
    r"|\bdatetime\.(?:now|utcnow|today)\s*\("
    r"|\bdate\.today\s*\("
    r"|\btime\.time\s*\("
    r"|\bDate\.now\s*\("
    r"|\bnew\s+Date\s*\(\s*\)"
    r"|\bEnvironment\.TickCount\b"
)


def check_no_static_references(example: CodeExample) -> CheckResult:
    snippet = Snippet.of(example)
    refs = [m.group(0).strip() for m in _STATIC_REF_RE.finditer(snippet.scan.code)]
    if refs:
        return False, f"Odwołania statyczne (zegar systemowy): {_names(sorted(set(refs)))}."
    return True, None


# ---------------------------------------------------------------------------
# Katalog
# ---------------------------------------------------------------------------

DEFAULT_RULES: tuple[Rule, ...] = (
    Rule(
        id=RuleCode.TEST_NAME_THREE_PARTS,
        applies_to=Applicability.ANY,
        description="Nazwa metody testowej ma trzy części rozdzielone '_' "
                    "(Metoda_Scenariusz_Oczekiwanie).",
        check=check_test_name_three_parts,
        topics=("naming your tests", "naming tests", "test naming", "test names"),
    ),
    Rule(
        id=RuleCode.ARRANGE_ACT_ASSERT,
        applies_to=Applicability.ANY,
        description="Test ma znaczniki faz Arrange, Act i Assert w tej kolejności.",
        check=check_arrange_act_assert,
        topics=("arrang",),
    ),
    Rule(
        id=RuleCode.NO_MAGIC_STRINGS,
        applies_to=Applicability.ANY,
        description="Literały napisowe występują tylko w nazwanych deklaracjach "
                    "lub atrybutach danych testu.",
        check=check_no_magic_strings,
        topics=("magic",),
    ),
    Rule(
        id=RuleCode.NO_LOGIC_IN_TESTS,
        applies_to=Applicability.ANY,
        description="Ciało testu nie zawiera if/for/foreach/while/switch ani ?:.",
        check=check_no_logic_in_tests,
        topics=("logic",),
    ),
    Rule(
        id=RuleCode.SINGLE_ACT,
        applies_to=Applicability.ANY,
        description="Faza Act ma jedną instrukcję (lub jedno przypisanie actual/result).",
        check=check_single_act,
        topics=("multiple act", "single act"),
    ),
    Rule(
        id=RuleCode.PREFER_HELPER_METHODS,
        applies_to=Applicability.ANY,
        description="Brak [SetUp]/[TestInitialize]/setUp ani konstruktora klasy "
                    "testowej — zamiast tego metody pomocnicze.",
        check=check_prefer_helper_methods,
        topics=("helper", "setup", "set up", "teardown"),
    ),
    Rule(
        id=RuleCode.NO_BARE_ASSERT,
        applies_to=Applicability.BETTER,
        description="Asercje używają helpera (Assert.*, .Should(), Verify), "
                    "nie gołego assert / Debug.Assert.",
        check=check_no_bare_assert,
    ),
    Rule(
        id=RuleCode.MOCK_NAMING,
        applies_to=Applicability.ANY,
        description="Dubler sprawdzany w asercji nazywa się mock*; "
                    "mock* zawsze jest sprawdzany.",
        check=check_mock_naming,
        topics=("mock", "fake"),
    ),
    Rule(
        id=RuleCode.NO_STATIC_REFERENCES,
        applies_to=Applicability.ANY,
        description="Brak odwołań do zegara systemowego (DateTime.Now, datetime.now() …).",
        check=check_no_static_references,
        topics=("static",),
    ),
)


def rules_by_id(rules: tuple[Rule, ...] | list[Rule] = DEFAULT_RULES) -> dict[str, Rule]:
    return {rule.id: rule for rule in rules}
