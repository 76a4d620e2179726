"""Assemble derived methods into a deterministic Python module."""

from __future__ import annotations

import logging
import textwrap
from collections.abc import Callable
from dataclasses import dataclass, field

from sumgen.errors import GenerationError
from sumgen.generate.config import DERIVE_TARGETS, GeneratorConfig
from sumgen.generate.predicates import generate_predicates
from sumgen.generate.to_string import generate_to_string
from sumgen.model import TypeDescriptor

logger = logging.getLogger(__name__)

HEADER = "# Generated by sumgen. Do not edit.\n"

_TARGETS: dict[str, Callable[[TypeDescriptor, GeneratorConfig], list[str]]] = {
    "is": generate_predicates,
    "to_string": lambda declaration, config: [generate_to_string(declaration, config)],
}


def mixin_name(declaration: TypeDescriptor) -> str:
    return f"{declaration.name}Derived"


@dataclass
class GeneratedImpl:
    declaration: TypeDescriptor
    config: GeneratorConfig
    methods: dict[str, list[str]] = field(default_factory=dict)
    errors: dict[str, GenerationError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_source(self) -> str:
        """Render the mixin class holding every successfully generated method."""
        decl = self.declaration
        lines = [HEADER, "from __future__ import annotations\n"]
        if decl.generics:
            lines.append("\nfrom typing import Generic, TypeVar\n\n")
            lines.extend(f"{g} = TypeVar({g!r})\n" for g in decl.generics)
            base = f"(Generic[{', '.join(decl.generics)}])"
        else:
            base = ""
        lines.append(f"\n\nclass {mixin_name(decl)}{base}:\n")

        bodies = [m for target in self.config.derive for m in self.methods.get(target, [])]
        if not bodies:
            lines.append(f"{self.config.indent}pass\n")
        lines.append("\n".join(textwrap.indent(m, self.config.indent) for m in bodies))
        return "".join(lines)


def generate_impl(
    declaration: TypeDescriptor, config: GeneratorConfig | None = None
) -> GeneratedImpl:
    """Run each requested derive target independently.

    A failing target records its error and leaves the others untouched.
    """
    cfg = config or GeneratorConfig()
    result = GeneratedImpl(declaration, cfg)
    for target in cfg.derive:
        if target not in _TARGETS:
            raise ValueError(f"Unknown derive target {target!r}. Choose from {DERIVE_TARGETS}.")
        try:
            result.methods[target] = _TARGETS[target](declaration, cfg)
        except GenerationError as exc:
            logger.debug("derive %s failed for %s: %s", target, declaration.name, exc)
            result.errors[target] = exc
        else:
            logger.debug(
                "derive %s for %s: %d method(s)",
                target,
                declaration.name,
                len(result.methods[target]),
            )
    return result


def derive_source(declaration: TypeDescriptor, config: GeneratorConfig | None = None) -> str:
    result = generate_impl(declaration, config)
    for error in result.errors.values():
        raise error
    return result.to_source()
