"""Per-variant tag predicates (``is_cat``, ``is_horse_and_cart``, ...)."""

from __future__ import annotations

import logging

from sumgen.casing import snakify
from sumgen.errors import ErrorKind, GenerationError
from sumgen.generate.config import GeneratorConfig
from sumgen.model import TypeDescriptor, VariantDescriptor
from sumgen.properties import is_disabled

logger = logging.getLogger(__name__)


def non_sum_type_error(declaration: TypeDescriptor) -> GenerationError:
    return GenerationError(
        ErrorKind.NOT_A_SUM_TYPE,
        f"This macro only supports enums (got kind {declaration.kind!r})",
        type_name=declaration.name,
    )


def predicate_name(variant: VariantDescriptor, config: GeneratorConfig) -> str:
    return f"{config.predicate_prefix}{snakify(variant.name)}"


def render_predicate(variant: VariantDescriptor, config: GeneratorConfig) -> str:
    # tag comparison only: the payload is never touched
    return (
        f"def {predicate_name(variant, config)}(self) -> bool:\n"
        f"{config.indent}return self.{config.tag_attr} == {variant.name!r}\n"
    )


def generate_predicates(
    declaration: TypeDescriptor, config: GeneratorConfig | None = None
) -> list[str]:
    """Emit one predicate method per enabled variant, in declaration order.

    Only the ``disabled`` flag matters here, so variants whose display settings
    are invalid still get a predicate.
    """
    cfg = config or GeneratorConfig()
    if not declaration.is_sum_type:
        raise non_sum_type_error(declaration)

    methods: list[str] = []
    for variant in declaration.variants:
        try:
            disabled = is_disabled(variant)
        except GenerationError as exc:
            raise exc.with_location(declaration.name, variant.name) from None
        if disabled:
            logger.debug("%s::%s is disabled; no predicate", declaration.name, variant.name)
            continue
        methods.append(render_predicate(variant, cfg))
    return methods
