import pytest

from sumgen.errors import ErrorKind, GenerationError
from sumgen.template import Literal, Placeholder, capture_placeholders, parse_template


def test_escaped_braces_are_literal_text():
    template = parse_template("{{literal}}")
    assert template.placeholders == []
    assert template.segments == [Literal("{literal}")]
    assert template.literal() == "{literal}"


def test_placeholders_are_ordered_and_unique():
    template = parse_template("{x:>5} and {y} and {x}")
    assert template.placeholders == ["x", "y"]
    assert template.segments[0] == Placeholder("x", ">5")
    assert template.segments[2] == Placeholder("y")


def test_escapes_next_to_placeholder():
    template = parse_template("{{{x}}}")
    assert template.segments == [Literal("{"), Placeholder("x"), Literal("}")]


def test_only_first_colon_splits_spec():
    template = parse_template("{when:%H:%M}")
    assert template.segments == [Placeholder("when", "%H:%M")]


@pytest.mark.parametrize(
    ("source", "kind", "position"),
    [
        ("{name", ErrorKind.UNCLOSED_BRACKET, 0),
        ("ok {a{b}", ErrorKind.UNBALANCED_OPEN_BRACKET, 5),
        ("a}", ErrorKind.UNMATCHED_CLOSING_BRACKET, 1),
        ("{x}}", ErrorKind.UNMATCHED_CLOSING_BRACKET, 3),
        ("{1x}", ErrorKind.INVALID_IDENTIFIER, 0),
        ("{}", ErrorKind.INVALID_IDENTIFIER, 0),
        ("{class}", ErrorKind.INVALID_IDENTIFIER, 0),
        ("{a.b}", ErrorKind.INVALID_IDENTIFIER, 0),
    ],
)
def test_template_errors(source, kind, position):
    with pytest.raises(GenerationError) as info:
        parse_template(source)
    assert info.value.kind is kind
    assert info.value.position == position
    assert info.value.template == source


def test_literal_refuses_placeholders():
    with pytest.raises(ValueError):
        parse_template("{x}").literal()


def test_capture_placeholders_shortcut():
    assert capture_placeholders("plain") == []
    assert capture_placeholders("{b}{a}{b}") == ["b", "a"]
