"""
Testy heurystyk strukturalnych: skanowanie literałów, metody testowe, fazy, asercje.
"""

from evaluator.heuristics import Snippet, is_python, scan_c_family, scan_python
from guide_model import ExampleLabel


class TestScanCFamily:
    """Maskowanie literałów i komentarzy w składni C-family."""

    def test_scan_when_comment_inside_string_then_kept_as_literal(self):
        source = 'var s = "a // b"; // komentarz'
        result = scan_c_family(source)
        assert result.literals == [(0, "a // b")]
        assert "komentarz" not in result.code
        assert len(result.code) == len(source)
        assert result.balanced

    def test_scan_when_verbatim_string_then_doubled_quotes_inside(self):
        result = scan_c_family('var s = @"a""b";')
        assert result.literals == [(0, 'a""b')]
        assert result.balanced

    def test_scan_when_block_comment_spans_lines_then_line_numbers_kept(self):
        source = '/* a\nb */\nvar s = "x";'
        result = scan_c_family(source)
        assert result.literals == [(2, "x")]
        assert result.code.count("\n") == 2

    def test_scan_when_unterminated_string_then_unbalanced(self):
        assert not scan_c_family('var s = "abc;').balanced

    def test_scan_when_unterminated_comment_then_unbalanced(self):
        assert not scan_c_family("var x = 1; /* open").balanced

    def test_scan_when_char_literal_then_not_a_string(self):
        result = scan_c_family("var c = '\"';")
        assert result.literals == []
        assert result.balanced


class TestScanPython:
    """Maskowanie literałów i komentarzy w Pythonie."""

    def test_scan_when_triple_quoted_then_single_literal(self):
        source = 'x = """a\nb"""\ny = 1'
        result = scan_python(source)
        assert result.literals == [(0, "a\nb")]
        assert result.code.split("\n")[2] == "y = 1"

    def test_scan_when_hash_comment_then_masked(self):
        result = scan_python("x = 1  # 'not a string'")
        assert result.literals == []
        assert "not a string" not in result.code


class TestSyntaxFamily:
    """Wybór rodziny składni."""

    def test_is_python_when_language_given_then_language_wins(self, example_factory):
        assert is_python(example_factory("x = 1", language="py"))
        assert not is_python(example_factory("def test_a():\n    pass", language="csharp"))

    def test_is_python_when_no_language_then_def_signature(self, example_factory):
        assert is_python(example_factory("def test_a():\n    assert a", language=""))
        assert not is_python(example_factory("public void A() { }", language=""))


class TestSnippet:
    """Zapytania strukturalne Snippet."""

    def test_methods_when_attributes_then_only_attributed(self):
        source = (
            "[Fact]\n"
            "public void Add_Empty_ReturnsZero()\n"
            "{\n"
            "    Assert.Equal(0, Add(\"\"));\n"
            "}\n"
            "\n"
            "private void Helper()\n"
            "{\n"
            "}\n"
        )
        methods = Snippet(source).test_methods()
        assert [m.name for m in methods] == ["Add_Empty_ReturnsZero"]
        assert "Assert.Equal" in methods[0].body

    def test_methods_when_no_attributes_then_void_methods(self):
        source = "public void Add_A_B()\n{\n}\nprivate int Helper()\n{\n    return 1;\n}\n"
        assert [m.name for m in Snippet(source).test_methods()] == ["Add_A_B"]

    def test_methods_when_expression_body_then_body_after_arrow(self):
        source = "[Fact]\npublic void A_B_C() => Assert.True(ok);"
        (method,) = Snippet(source).test_methods()
        assert "Assert.True" in method.body

    def test_methods_when_unclosed_braces_then_body_none(self):
        (method,) = Snippet("[Fact]\npublic void A_B_C()\n{\n    x();\n").test_methods()
        assert method.body is None

    def test_methods_when_python_then_test_functions_preferred(self):
        source = "def helper():\n    pass\n\ndef test_add():\n    assert add(1, 2) == 3\n"
        methods = Snippet(source, python=True).test_methods()
        assert [m.name for m in methods] == ["test_add"]
        assert "assert add" in methods[0].body

    def test_bodies_when_no_methods_then_whole_code(self):
        snippet = Snippet("var x = 1;\nAssert.Equal(1, x);")
        assert snippet.bodies() == [snippet.scan.code]

    def test_braces_when_closing_before_opening_then_unbalanced(self):
        assert not Snippet("}{").braces_balanced
        assert not Snippet("}{").parseable

    def test_phases_when_combined_marker_then_all_words(self):
        snippet = Snippet("// Arrange\nvar x = 1;\n// Act & Assert\nAssert.Equal(1, F(x));")
        assert snippet.phases() == [(0, ("arrange",)), (2, ("act", "assert"))]

    def test_phases_when_comment_is_prose_then_not_a_marker(self):
        assert Snippet("// Arrange the data first\nvar x = 1;").phases() == []

    def test_phase_segment_when_marker_then_lines_until_next(self):
        snippet = Snippet("// Arrange\na();\n// Act\nb();\nc();\n// Assert\nAssert.True(d);")
        assert snippet.phase_segment("act") == [3, 4]
        assert snippet.phase_segment("assert") == [6]

    def test_phase_segment_when_no_marker_then_none(self):
        assert Snippet("a();").phase_segment("act") is None

    def test_phase_marker_when_combined_marker_then_all_words(self):
        snippet = Snippet("// Arrange & Act\nvar actual = c.Add(\"\");\n// Assert\nAssert.Equal(0, actual);")
        assert snippet.phase_marker("act") == ("arrange", "act")
        assert snippet.phase_marker("assert") == ("assert",)
        assert Snippet("a();").phase_marker("act") is None

    def test_assertions_when_helpers_and_bare_then_split(self):
        source = (
            "assert x == 1\n"
            "self.assertEqual(x, 1)\n"
            "mock.assert_called_once()\n"
            "y = 2\n"
        )
        snippet = Snippet(source, python=True)
        assert snippet.assertion_lines() == [0, 1, 2]
        assert snippet.bare_assertion_lines() == [0]

    def test_assertions_when_debug_assert_then_bare(self):
        snippet = Snippet("Debug.Assert(x == 1);\nAssert.Equal(1, x);")
        assert snippet.bare_assertion_lines() == [0]
        assert snippet.assertion_lines() == [0, 1]

    def test_assertions_when_inside_string_then_ignored(self):
        snippet = Snippet('var s = "Assert.Equal(1, 2)";')
        assert snippet.assertion_lines() == []

    def test_of_when_example_then_syntax_from_language(self, example_factory):
        example = example_factory("assert x", label=ExampleLabel.BAD, language="python")
        assert Snippet.of(example).python
