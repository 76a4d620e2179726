import pytest

from sumgen.errors import ErrorKind, GenerationError
from sumgen.generate.config import GeneratorConfig
from sumgen.generate.predicates import generate_predicates
from sumgen.model import TypeDescriptor


def _animal(**extra):
    payload = {
        "name": "Animal",
        "variants": [
            {"name": "Cat"},
            {"name": "HorseAndCart", "fields": ["horses"]},
            {"name": "Ghost", "fields": 1, "attributes": {"disabled": True}},
        ],
    }
    payload.update(extra)
    return TypeDescriptor.from_mapping(payload)


def test_one_predicate_per_enabled_variant():
    methods = generate_predicates(_animal())
    assert methods == [
        "def is_cat(self) -> bool:\n    return self.tag == 'Cat'\n",
        "def is_horse_and_cart(self) -> bool:\n    return self.tag == 'HorseAndCart'\n",
    ]


def test_disabled_variant_has_no_predicate():
    assert not any("is_ghost" in m for m in generate_predicates(_animal()))


def test_predicate_naming_ignores_case_style():
    methods = generate_predicates(_animal(case_style="SCREAMING-KEBAB-CASE"))
    assert methods[1].startswith("def is_horse_and_cart(self)")


def test_predicates_follow_config():
    config = GeneratorConfig(tag_attr="kind", predicate_prefix="is_a_", indent="\t")
    methods = generate_predicates(_animal(), config)
    assert methods[0] == "def is_a_cat(self) -> bool:\n\treturn self.kind == 'Cat'\n"


def test_predicates_survive_malformed_default():
    decl = TypeDescriptor.from_mapping(
        {"name": "Animal", "variants": [{"name": "Cat", "attributes": {"default": True}}]}
    )
    assert len(generate_predicates(decl)) == 1


def test_predicates_reject_non_enum():
    decl = TypeDescriptor.from_mapping({"name": "Point", "kind": "struct"})
    with pytest.raises(GenerationError) as info:
        generate_predicates(decl)
    assert info.value.kind is ErrorKind.NOT_A_SUM_TYPE
    assert info.value.location == "Point"


def test_predicates_ignore_other_malformed_attributes():
    decl = TypeDescriptor.from_mapping(
        {
            "name": "Animal",
            "variants": [
                {"name": "Cat", "attributes": {"case_style": "shouting"}},
                {"name": "Dog", "attributes": {"to_string": 3}},
            ],
        }
    )
    assert [m.split("(")[0] for m in generate_predicates(decl)] == ["def is_cat", "def is_dog"]


def test_malformed_disabled_flag_is_reported():
    decl = TypeDescriptor.from_mapping(
        {"name": "Animal", "variants": [{"name": "Cat", "attributes": {"disabled": "yes"}}]}
    )
    with pytest.raises(GenerationError) as info:
        generate_predicates(decl)
    assert info.value.kind is ErrorKind.MALFORMED_ATTRIBUTE
    assert info.value.location == "Animal::Cat"
