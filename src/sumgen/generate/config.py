from __future__ import annotations

from dataclasses import dataclass

DERIVE_TARGETS = ("is", "to_string")


@dataclass
class GeneratorConfig:
    tag_attr: str = "tag"  # discriminant holding the variant name
    values_attr: str = "values"  # payload tuple, declaration order
    predicate_prefix: str = "is_"
    to_string_name: str = "to_string"
    indent: str = "    "
    disabled_message: str = "to_string() called on disabled variant."
    derive: tuple[str, ...] = DERIVE_TARGETS
