"""
Tests for the template parser.
"""

import math

import pytest

from pgen.errors import PGUserError
from pgen.grammar.model import ChoiceNode, LiteralNode, NodeType, SequenceNode
from pgen.grammar.parser import ParseErrorKind, TemplateParseError, TemplateParser, parse_template


def _texts(seq):
    """Literal texts of a sequence's direct children (None for groups)."""
    return [c.text if isinstance(c, LiteralNode) else None for c in seq.children]


class TestTemplateParser:

    def setup_method(self):
        self.parser = TemplateParser()

    def test_empty_template(self):
        """Test empty input parses to an empty sequence"""
        template = self.parser.parse("")
        assert isinstance(template.root, SequenceNode)
        assert template.root.children == ()
        assert template.source == ""

    def test_plain_literal(self):
        """Test text without groups"""
        template = self.parser.parse("a photo of a cat")
        assert isinstance(template.root, SequenceNode)
        assert _texts(template.root) == ["a photo of a cat"]

    def test_top_level_colon_is_text(self):
        """Test ':' outside of groups is literal"""
        template = self.parser.parse("time: 5pm")
        assert _texts(template.root) == ["time: 5pm"]

    def test_simple_choice(self):
        """Test a single group between literals"""
        template = self.parser.parse("a random {prompt|word}!")
        root = template.root
        assert _texts(root) == ["a random ", None, "!"]

        choice = root.children[1]
        assert isinstance(choice, ChoiceNode)
        assert [a.declared_order for a in choice.alternatives] == [0, 1]
        assert [_texts(a.node) for a in choice.alternatives] == [["prompt"], ["word"]]
        assert all(a.weight == 1.0 for a in choice.alternatives)

    def test_weights(self):
        """Test ':weight' suffixes"""
        choice = self.parser.parse("{ball:1|box:3}").root.children[0]
        assert [a.weight for a in choice.alternatives] == [1.0, 3.0]
        assert [_texts(a.node) for a in choice.alternatives] == [["ball"], ["box"]]

    def test_decimal_and_padded_weights(self):
        """Test decimal weights and surrounding whitespace"""
        choice = self.parser.parse("{a:0.5|b: 2.|c:.25 }").root.children[0]
        assert [a.weight for a in choice.alternatives] == [0.5, 2.0, 0.25]

    def test_last_colon_is_the_weight_separator(self):
        """Test earlier colons stay in the text"""
        choice = self.parser.parse("{time: 5:2|x}").root.children[0]
        first = choice.alternatives[0]
        assert first.weight == 2.0
        assert _texts(first.node) == ["time: 5"]

    def test_nested_choice(self):
        """Test arbitrarily nested groups"""
        template = self.parser.parse("this {{large |}cake|{loud|tiny} boat} is not very nice")
        outer = template.root.children[1]
        assert isinstance(outer, ChoiceNode)
        assert len(outer.alternatives) == 2

        cake = outer.alternatives[0].node
        assert _texts(cake) == [None, "cake"]
        optional = cake.children[0]
        assert [_texts(a.node) for a in optional.alternatives] == [["large "], []]

        boat = outer.alternatives[1].node
        assert _texts(boat) == [None, " boat"]

    def test_nested_colons_belong_to_nested_group(self):
        """Test ':' inside a nested group does not weight the outer alternative"""
        outer = self.parser.parse("{a {b:2|c}|d}").root.children[0]
        first = outer.alternatives[0]
        assert first.weight == 1.0
        inner = first.node.children[1]
        assert [a.weight for a in inner.alternatives] == [2.0, 1.0]

    def test_weight_after_nested_group(self):
        """Test a weight following a nested group"""
        outer = self.parser.parse("{{x|y} z:4|w}").root.children[0]
        assert outer.alternatives[0].weight == 4.0

    def test_empty_group(self):
        """Test '{}' is a choice with one empty alternative"""
        choice = self.parser.parse("{}").root.children[0]
        assert isinstance(choice, ChoiceNode)
        assert len(choice.alternatives) == 1
        assert choice.alternatives[0].node.children == ()

    def test_empty_alternatives(self):
        """Test empty alternatives between separators"""
        choice = self.parser.parse("{|a||:2}").root.children[0]
        assert len(choice.alternatives) == 4
        assert [a.weight for a in choice.alternatives] == [1.0, 1.0, 1.0, 2.0]
        assert choice.alternatives[3].node.children == ()

    def test_top_level_pipe_is_implicit_choice(self):
        """Test 'a|b' at top level chooses between a and b"""
        root = self.parser.parse("cat:2|dog").root
        assert root.get_type() == NodeType.CHOICE
        assert [a.weight for a in root.alternatives] == [2.0, 1.0]

    def test_escaped_delimiters(self):
        """Test escaped characters are plain text"""
        template = self.parser.parse(r"\{not a group\} {a\|b|c\:d}")
        assert _texts(template.root)[0] == "{not a group} "
        choice = template.root.children[1]
        assert [_texts(a.node) for a in choice.alternatives] == [["a|b"], ["c:d"]]
        assert all(a.weight == 1.0 for a in choice.alternatives)

    def test_parsing_is_deterministic(self):
        """Test the same input yields structurally identical trees"""
        text = "{a:2|{b|c}:3} d"
        assert str(parse_template(text)) == str(parse_template(text))

    def test_str_restores_source(self):
        """Test round-trip of the source form"""
        assert str(parse_template(r"x {a:3|b|\{c\}} y")) == r"x {a:3|b|\{c\}} y"

    def test_deep_nesting(self):
        """Test nesting far beyond the interpreter recursion limit"""
        depth = 5000
        text = "{" * depth + "x" + "}" * depth
        template = self.parser.parse(text)
        node = template.root
        for _ in range(depth):
            (node,) = node.children
            assert isinstance(node, ChoiceNode)
            node = node.alternatives[0].node
        assert _texts(node) == ["x"]
        assert str(template) == text


class TestParseErrors:

    def test_unterminated_group(self):
        """Test unmatched '{'"""
        with pytest.raises(TemplateParseError) as exc:
            parse_template("a {unterminated")
        assert exc.value.kind == ParseErrorKind.UNTERMINATED_GROUP
        assert exc.value.offset == 2

    def test_unterminated_reports_innermost_group(self):
        """Test the innermost unclosed brace is reported"""
        with pytest.raises(TemplateParseError) as exc:
            parse_template("{a|{b|c")
        assert exc.value.offset == 3

    def test_unexpected_close_brace(self):
        """Test unmatched '}'"""
        with pytest.raises(TemplateParseError) as exc:
            parse_template("a } stray")
        assert exc.value.kind == ParseErrorKind.UNEXPECTED_CLOSE_BRACE
        assert exc.value.offset == 2

    def test_extra_close_brace_after_group(self):
        """Test '}' after a balanced group"""
        with pytest.raises(TemplateParseError) as exc:
            parse_template("{a}}")
        assert exc.value.kind == ParseErrorKind.UNEXPECTED_CLOSE_BRACE
        assert exc.value.offset == 3

    def test_invalid_weight_strict(self):
        """Test non-numeric weight fails without leniency"""
        with pytest.raises(TemplateParseError, match="Invalid weight specifier 'abc'") as exc:
            parse_template("{ball:abc|box:3}")
        assert exc.value.kind == ParseErrorKind.INVALID_WEIGHT
        assert exc.value.offset == 6
        assert exc.value.fragment == "abc"

    def test_invalid_weight_lenient(self):
        """Test non-numeric weight becomes literal text with leniency"""
        template = parse_template("{ball:abc|box:3}", lenient=True)
        choice = template.root.children[0]
        ball, box = choice.alternatives
        assert _texts(ball.node) == ["ball:abc"]
        assert ball.weight == 1.0
        assert _texts(box.node) == ["box"]
        assert box.weight == 3.0

    def test_lenient_keeps_nested_group(self):
        """Test lenient fallback keeps groups inside the alternative"""
        choice = parse_template("{a:{b|c}}", lenient=True).root.children[0]
        alt = choice.alternatives[0]
        assert alt.weight == 1.0
        assert _texts(alt.node) == ["a:", None]

    @pytest.mark.parametrize("text", ["{a:}", "{a:1e3}", "{a:inf}", "{a:1.2.3}", "{a:nan}"])
    def test_malformed_weights(self, text):
        """Test weights that are not plain decimals"""
        with pytest.raises(TemplateParseError) as exc:
            parse_template(text)
        assert exc.value.kind == ParseErrorKind.INVALID_WEIGHT

    @pytest.mark.parametrize("lenient", [False, True])
    @pytest.mark.parametrize("text", ["{ball:-1}", "{ball:0}", "{a|b:-0.5}"])
    def test_non_positive_weight_always_fails(self, text, lenient):
        """Test negative/zero weights are errors regardless of leniency"""
        with pytest.raises(TemplateParseError) as exc:
            parse_template(text, lenient=lenient)
        assert exc.value.kind == ParseErrorKind.NEGATIVE_WEIGHT

    def test_deep_unterminated_group(self):
        """Test the innermost brace is reported at any depth"""
        with pytest.raises(TemplateParseError) as exc:
            parse_template("{" * 3000 + "x")
        assert exc.value.kind == ParseErrorKind.UNTERMINATED_GROUP
        assert exc.value.offset == 2999

    def test_deep_extra_close_brace(self):
        """Test a stray '}' after deeply nested groups"""
        with pytest.raises(TemplateParseError) as exc:
            parse_template("{" * 3000 + "}" * 3001)
        assert exc.value.kind == ParseErrorKind.UNEXPECTED_CLOSE_BRACE
        assert exc.value.offset == 6000

    @pytest.mark.parametrize("lenient", [False, True])
    def test_group_weights_overflowing_to_infinity(self, lenient):
        """Test finite weights whose sum is not finite"""
        big = "9" * 308
        text = "{a:" + big + "|b:" + big + "}"
        with pytest.raises(TemplateParseError, match="Group weights sum to infinity") as exc:
            parse_template(text, lenient=lenient)
        assert exc.value.kind == ParseErrorKind.INVALID_WEIGHT
        assert exc.value.offset == text.rindex(":") + 1
        assert exc.value.fragment == big

    def test_single_huge_weight_is_accepted(self):
        """Test a huge weight is fine while the group total stays finite"""
        choice = parse_template("{a:" + "9" * 308 + "|b}").root.children[0]
        assert choice.alternatives[0].weight == pytest.approx(1e308)
        assert math.isfinite(choice.total_weight)

    def test_error_is_user_error(self):
        """Test parse errors are user-facing ValueErrors"""
        with pytest.raises(TemplateParseError) as exc:
            parse_template("}")
        assert isinstance(exc.value, PGUserError)
        assert isinstance(exc.value, ValueError)
        assert str(exc.value) == "Unexpected closing brace at char 0"
