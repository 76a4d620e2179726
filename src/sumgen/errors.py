"""Structured generation-time errors."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum


class ErrorKind(StrEnum):
    NOT_A_SUM_TYPE = "NotASumType"
    MALFORMED_DEFAULT = "MalformedDefault"
    UNBALANCED_OPEN_BRACKET = "UnbalancedOpenBracket"
    UNMATCHED_CLOSING_BRACKET = "UnmatchedClosingBracket"
    INVALID_IDENTIFIER = "InvalidIdentifier"
    UNCLOSED_BRACKET = "UnclosedBracket"
    UNBOUND_PLACEHOLDER = "UnboundPlaceholder"
    MALFORMED_ATTRIBUTE = "MalformedAttribute"
    MALFORMED_DECLARATION = "MalformedDeclaration"


@dataclass(slots=True, eq=False)
class GenerationError(ValueError):
    """Failure while resolving or generating code for a declaration.

    ``type_name`` and ``variant`` locate the offending item. Template errors
    are raised without a location and re-raised by the generators through
    :meth:`with_location`.
    """

    kind: ErrorKind
    message: str
    type_name: str | None = None
    variant: str | None = None
    template: str | None = None
    position: int | None = None

    def __post_init__(self) -> None:
        self.args = (self.__str__(),)

    @property
    def location(self) -> str | None:
        if self.type_name and self.variant:
            return f"{self.type_name}::{self.variant}"
        return self.type_name or self.variant

    def __str__(self) -> str:
        base = self.message
        if self.location:
            base = f"{self.location}: {base}"
        if self.template is not None:
            base = f"{base} (template {self.template!r})"
        return base

    def with_location(self, type_name: str | None, variant: str | None = None) -> GenerationError:
        return replace(
            self,
            type_name=self.type_name or type_name,
            variant=self.variant or variant,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": str(self.kind),
            "message": self.message,
            "location": self.location,
            "template": self.template,
            "position": self.position,
        }
