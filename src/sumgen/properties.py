"""Interpret raw variant attributes into typed properties."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from sumgen.casing import CaseStyle, convert_case
from sumgen.errors import ErrorKind, GenerationError
from sumgen.model import ShapeKind, TypeDescriptor, VariantDescriptor

FLAG_KEYS = ("disabled", "default")


@dataclass(frozen=True)
class VariantProperties:
    disabled: bool = False
    default: bool = False
    to_string: str | None = None
    serialize: tuple[str, ...] = ()
    case_style: CaseStyle | None = None

    def preferred_name(self, variant_name: str, type_case_style: CaseStyle) -> str:
        if self.to_string is not None:
            return self.to_string
        if self.serialize:
            return self.serialize[0]
        return convert_case(variant_name, self.case_style or type_case_style)


@dataclass(frozen=True)
class ResolvedVariant:
    variant: VariantDescriptor
    properties: VariantProperties
    display: str | None

    @property
    def name(self) -> str:
        return self.variant.name

    @property
    def uses_default_field(self) -> bool:
        return self.display is None


def _malformed(variant: VariantDescriptor, message: str) -> GenerationError:
    return GenerationError(ErrorKind.MALFORMED_ATTRIBUTE, message, variant=variant.name)


def _flag(variant: VariantDescriptor, attributes: Mapping[str, Any], key: str) -> bool:
    value = attributes.get(key, False)
    if value is None:
        # `disabled:` written without a value
        return True
    if not isinstance(value, bool):
        raise _malformed(variant, f"attribute '{key}' must be a flag, got {value!r}")
    return value


def is_disabled(variant: VariantDescriptor) -> bool:
    """Read only the ``disabled`` flag, ignoring every other attribute."""
    return _flag(variant, variant.attributes, "disabled")


def parse_variant_properties(variant: VariantDescriptor) -> VariantProperties:
    attributes = variant.attributes
    disabled, default = (_flag(variant, attributes, key) for key in FLAG_KEYS)

    to_string = attributes.get("to_string")
    if to_string is not None and not isinstance(to_string, str):
        raise _malformed(variant, f"attribute 'to_string' must be a string, got {to_string!r}")

    raw_serialize = attributes.get("serialize")
    if raw_serialize is None:
        serialize: tuple[str, ...] = ()
    elif isinstance(raw_serialize, str):
        serialize = (raw_serialize,)
    elif isinstance(raw_serialize, Sequence) and all(isinstance(s, str) for s in raw_serialize):
        serialize = tuple(raw_serialize)
    else:
        raise _malformed(
            variant,
            f"attribute 'serialize' must be a string or list of strings, got {raw_serialize!r}",
        )

    case_style = None
    if attributes.get("case_style") is not None:
        try:
            case_style = CaseStyle.parse(str(attributes["case_style"]))
        except GenerationError as exc:
            raise exc.with_location(None, variant.name) from None

    return VariantProperties(
        disabled=disabled,
        default=default,
        to_string=to_string,
        serialize=serialize,
        case_style=case_style,
    )


def resolve_variant(variant: VariantDescriptor, type_case_style: CaseStyle) -> ResolvedVariant:
    properties = parse_variant_properties(variant)
    # the default shape check only covers enabled variants
    if properties.default and not properties.disabled:
        shape = variant.shape
        if shape.kind is not ShapeKind.UNNAMED or shape.field_count != 1:
            raise GenerationError(
                ErrorKind.MALFORMED_DEFAULT,
                "Default only works on newtype variants with a single string field",
                variant=variant.name,
            )
        if properties.to_string is None:
            return ResolvedVariant(variant, properties, display=None)
    return ResolvedVariant(
        variant, properties, display=properties.preferred_name(variant.name, type_case_style)
    )


def resolve_variants(declaration: TypeDescriptor) -> list[ResolvedVariant]:
    resolved: list[ResolvedVariant] = []
    for variant in declaration.variants:
        try:
            resolved.append(resolve_variant(variant, declaration.case_style))
        except GenerationError as exc:
            raise exc.with_location(declaration.name, variant.name) from None
    return resolved
