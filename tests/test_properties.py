import pytest

from sumgen.casing import CaseStyle
from sumgen.errors import ErrorKind, GenerationError
from sumgen.model import Shape, TypeDescriptor, VariantDescriptor
from sumgen.properties import parse_variant_properties, resolve_variant, resolve_variants


def test_plain_variant_uses_case_converted_name():
    resolved = resolve_variant(VariantDescriptor("HorseAndCart"), CaseStyle.SNAKE_CASE)
    assert resolved.display == "horse_and_cart"
    assert not resolved.properties.disabled


def test_no_case_style_keeps_identifier():
    resolved = resolve_variant(VariantDescriptor("HorseAndCart"), CaseStyle.NONE)
    assert resolved.display == "HorseAndCart"


def test_variant_case_style_overrides_type_style():
    variant = VariantDescriptor("HorseAndCart", attributes={"case_style": "kebab-case"})
    assert resolve_variant(variant, CaseStyle.SNAKE_CASE).display == "horse-and-cart"


def test_first_serialize_alias_is_preferred():
    variant = VariantDescriptor("DarkBlue", attributes={"serialize": ["navy", "dark_blue"]})
    resolved = resolve_variant(variant, CaseStyle.SNAKE_CASE)
    assert resolved.properties.serialize == ("navy", "dark_blue")
    assert resolved.display == "navy"


def test_single_serialize_string_is_accepted():
    variant = VariantDescriptor("DarkBlue", attributes={"serialize": "navy"})
    assert parse_variant_properties(variant).serialize == ("navy",)


def test_to_string_beats_serialize():
    variant = VariantDescriptor(
        "DarkBlue", attributes={"serialize": "navy", "to_string": "Dark Blue"}
    )
    assert resolve_variant(variant, CaseStyle.NONE).display == "Dark Blue"


def test_default_variant_needs_no_template():
    variant = VariantDescriptor("Green", Shape.unnamed(1), {"default": True})
    resolved = resolve_variant(variant, CaseStyle.SNAKE_CASE)
    assert resolved.uses_default_field
    assert resolved.display is None


def test_default_with_to_string_uses_the_template():
    variant = VariantDescriptor("Green", Shape.unnamed(1), {"default": True, "to_string": "g"})
    resolved = resolve_variant(variant, CaseStyle.NONE)
    assert resolved.display == "g"
    assert not resolved.uses_default_field


@pytest.mark.parametrize(
    "shape", [Shape.unit(), Shape.unnamed(2), Shape.unnamed(0), Shape.named(["value"])]
)
def test_default_requires_single_unnamed_field(shape):
    variant = VariantDescriptor("Green", shape, {"default": True})
    with pytest.raises(GenerationError) as info:
        resolve_variant(variant, CaseStyle.NONE)
    assert info.value.kind is ErrorKind.MALFORMED_DEFAULT
    assert info.value.variant == "Green"


def test_disabled_default_variant_is_not_shape_checked():
    variant = VariantDescriptor("Ghost", Shape.unit(), {"disabled": True, "default": True})
    resolved = resolve_variant(variant, CaseStyle.SNAKE_CASE)
    assert resolved.properties.disabled
    assert resolved.display == "ghost"


def test_bare_flag_counts_as_set():
    variant = VariantDescriptor("Legacy", attributes={"disabled": None})
    assert parse_variant_properties(variant).disabled


def test_unknown_attributes_are_ignored():
    variant = VariantDescriptor("Cat", attributes={"message": "meow", "props": {"a": 1}})
    assert parse_variant_properties(variant).disabled is False


@pytest.mark.parametrize(
    "attributes",
    [
        {"disabled": "yes"},
        {"serialize": ["ok", 3]},
        {"to_string": 5},
        {"case_style": "nonsense"},
    ],
)
def test_malformed_attributes(attributes):
    with pytest.raises(GenerationError) as info:
        parse_variant_properties(VariantDescriptor("Cat", attributes=attributes))
    assert info.value.kind is ErrorKind.MALFORMED_ATTRIBUTE
    assert info.value.variant == "Cat"


def test_resolve_variants_keeps_order_and_locates_errors():
    decl = TypeDescriptor(
        "Color",
        variants=(
            VariantDescriptor("Red"),
            VariantDescriptor("Blue"),
        ),
        case_style=CaseStyle.UPPERCASE,
    )
    assert [r.display for r in resolve_variants(decl)] == ["RED", "BLUE"]

    broken = TypeDescriptor(
        "Color",
        variants=(
            VariantDescriptor("Red"),
            VariantDescriptor("Blue", Shape.unit(), {"default": True}),
        ),
    )
    with pytest.raises(GenerationError) as info:
        resolve_variants(broken)
    assert info.value.location == "Color::Blue"
