"""Structured sum-type declarations handed to the generators."""

from __future__ import annotations

import keyword
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from sumgen.casing import CaseStyle
from sumgen.errors import ErrorKind, GenerationError


class ShapeKind(StrEnum):
    UNIT = "unit"
    UNNAMED = "unnamed"
    NAMED = "named"


def is_identifier(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)


@dataclass(frozen=True)
class Shape:
    kind: ShapeKind
    field_count: int = 0
    field_names: tuple[str, ...] = ()

    @staticmethod
    def unit() -> Shape:
        return Shape(ShapeKind.UNIT)

    @staticmethod
    def unnamed(count: int) -> Shape:
        return Shape(ShapeKind.UNNAMED, field_count=count)

    @staticmethod
    def named(names: Sequence[str]) -> Shape:
        return Shape(ShapeKind.NAMED, field_count=len(names), field_names=tuple(names))

    @staticmethod
    def from_fields(fields: Any) -> Shape:
        # None -> unit, int -> unnamed, list of names -> named
        if fields is None:
            return Shape.unit()
        if isinstance(fields, bool):
            raise ValueError(f"fields must be a count or a list of names, got {fields!r}")
        if isinstance(fields, int):
            if fields < 0:
                raise ValueError(f"field count must not be negative, got {fields}")
            return Shape.unnamed(fields)
        if isinstance(fields, Sequence) and not isinstance(fields, str):
            names = [str(name) for name in fields]
            for name in names:
                if not is_identifier(name):
                    raise ValueError(f"field name {name!r} is not a valid identifier")
            duplicates = sorted({n for n in names if names.count(n) > 1})
            if duplicates:
                raise ValueError(f"duplicate field names: {', '.join(duplicates)}")
            return Shape.named(names)
        raise ValueError(f"fields must be a count or a list of names, got {fields!r}")

    def pattern(self) -> str:
        if self.kind is ShapeKind.UNIT:
            return ""
        if self.kind is ShapeKind.UNNAMED:
            return f"({self.field_count})"
        return "{" + ", ".join(self.field_names) + "}"


@dataclass(frozen=True)
class VariantDescriptor:
    name: str
    shape: Shape = field(default_factory=Shape.unit)
    attributes: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TypeDescriptor:
    name: str
    variants: tuple[VariantDescriptor, ...] = ()
    generics: tuple[str, ...] = ()
    case_style: CaseStyle = CaseStyle.NONE
    kind: str = "enum"

    @property
    def is_sum_type(self) -> bool:
        return self.kind == "enum"

    @staticmethod
    def from_mapping(payload: Mapping[str, Any]) -> TypeDescriptor:
        name = payload.get("name")
        if not isinstance(name, str) or not is_identifier(name):
            raise GenerationError(
                ErrorKind.MALFORMED_DECLARATION,
                f"type name must be an identifier, got {name!r}",
            )

        raw_generics = payload.get("generics") or ()
        if isinstance(raw_generics, str) or not isinstance(raw_generics, Sequence):
            raise GenerationError(
                ErrorKind.MALFORMED_DECLARATION,
                f"generics must be a list of names, got {raw_generics!r}",
                type_name=name,
            )
        generics = tuple(str(g) for g in raw_generics)
        for generic in generics:
            if not is_identifier(generic):
                raise GenerationError(
                    ErrorKind.MALFORMED_DECLARATION,
                    f"generic parameter {generic!r} is not an identifier",
                    type_name=name,
                )

        case_style = CaseStyle.NONE
        if payload.get("case_style") is not None:
            try:
                case_style = CaseStyle.parse(str(payload["case_style"]))
            except GenerationError as exc:
                raise exc.with_location(name) from None

        variants: list[VariantDescriptor] = []
        seen: set[str] = set()
        for raw in payload.get("variants") or ():
            variant_name = raw.get("name") if isinstance(raw, Mapping) else None
            if not isinstance(variant_name, str) or not is_identifier(variant_name):
                raise GenerationError(
                    ErrorKind.MALFORMED_DECLARATION,
                    f"variant name must be an identifier, got {variant_name!r}",
                    type_name=name,
                )
            if variant_name in seen:
                raise GenerationError(
                    ErrorKind.MALFORMED_DECLARATION,
                    "duplicate variant name",
                    type_name=name,
                    variant=variant_name,
                )
            seen.add(variant_name)
            try:
                shape = Shape.from_fields(raw.get("fields"))
            except ValueError as exc:
                raise GenerationError(
                    ErrorKind.MALFORMED_DECLARATION,
                    str(exc),
                    type_name=name,
                    variant=variant_name,
                ) from None
            attributes = raw.get("attributes") or {}
            if not isinstance(attributes, Mapping):
                raise GenerationError(
                    ErrorKind.MALFORMED_DECLARATION,
                    "attributes must be a mapping",
                    type_name=name,
                    variant=variant_name,
                )
            variants.append(VariantDescriptor(variant_name, shape, dict(attributes)))

        return TypeDescriptor(
            name=name,
            variants=tuple(variants),
            generics=generics,
            case_style=case_style,
            kind=str(payload.get("kind", "enum")),
        )
