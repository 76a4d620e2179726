"""Single exhaustive string-conversion method over all variants."""

from __future__ import annotations

import logging

from sumgen.errors import ErrorKind, GenerationError
from sumgen.generate.config import GeneratorConfig
from sumgen.generate.predicates import non_sum_type_error
from sumgen.model import ShapeKind, TypeDescriptor
from sumgen.properties import ResolvedVariant, resolve_variants
from sumgen.template import parse_template

logger = logging.getLogger(__name__)


def _unbound(variant: ResolvedVariant, names: list[str]) -> GenerationError:
    listed = ", ".join(names)
    if variant.variant.shape.kind is ShapeKind.NAMED:
        message = f"no field named {listed} to bind in format string"
    else:
        message = f"placeholders {{{listed}}} need named fields, variant has none"
    return GenerationError(
        ErrorKind.UNBOUND_PLACEHOLDER,
        message,
        variant=variant.name,
        template=variant.display,
    )


def render_arm_body(variant: ResolvedVariant, config: GeneratorConfig) -> str:
    """Return the expression a match arm returns for ``variant``."""
    values = f"self.{config.values_attr}"
    if variant.display is None:
        # Green("lime") displays as "lime"
        return f"str({values}[0])"

    try:
        template = parse_template(variant.display)
    except GenerationError as exc:
        raise exc.with_location(None, variant.name) from None
    used = template.placeholders
    shape = variant.variant.shape

    if shape.kind is not ShapeKind.NAMED:
        if used:
            raise _unbound(variant, used)
        return repr(template.literal())

    missing = [name for name in used if name not in shape.field_names]
    if missing:
        raise _unbound(variant, missing)
    if not used:
        return repr(template.literal())

    # unreferenced fields stay unbound
    args = ", ".join(
        f"{name}={values}[{index}]"
        for index, name in enumerate(shape.field_names)
        if name in used
    )
    logger.debug("%s binds %s", variant.name, ", ".join(n for n in shape.field_names if n in used))
    return f"{variant.display!r}.format({args})"


def generate_to_string(declaration: TypeDescriptor, config: GeneratorConfig | None = None) -> str:
    """Emit the string-conversion method; any failing variant aborts the whole method."""
    cfg = config or GeneratorConfig()
    if not declaration.is_sum_type:
        raise non_sum_type_error(declaration)

    ind = cfg.indent
    arms: list[str] = []
    covered: set[str] = set()
    for variant in resolve_variants(declaration):
        if variant.properties.disabled:
            logger.debug("%s::%s is disabled; left to catch-all", declaration.name, variant.name)
            continue
        try:
            body = render_arm_body(variant, cfg)
        except GenerationError as exc:
            raise exc.with_location(declaration.name, variant.name) from None
        arms.append(f"{ind * 2}case {variant.name!r}:\n{ind * 3}return {body}\n")
        covered.add(variant.name)

    header = f"def {cfg.to_string_name}(self) -> str:\n"
    if not declaration.variants:
        return header + f"{ind}raise RuntimeError({declaration.name + ' has no variants'!r})\n"

    uncovered = [v.name for v in declaration.variants if v.name not in covered]
    if uncovered:
        arms.append(f"{ind * 2}case _:\n{ind * 3}raise RuntimeError({cfg.disabled_message!r})\n")
    return header + f"{ind}match self.{cfg.tag_attr}:\n" + "".join(arms)
