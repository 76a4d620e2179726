"""Bind generated methods onto a real Python class."""

from __future__ import annotations

import importlib.util
import logging
import tempfile
from pathlib import Path
from types import ModuleType
from typing import Any, ClassVar

from sumgen.casing import snakify
from sumgen.generate.config import GeneratorConfig
from sumgen.generate.impl import derive_source, mixin_name
from sumgen.generate.predicates import predicate_name
from sumgen.model import Shape, ShapeKind, TypeDescriptor, VariantDescriptor
from sumgen.properties import is_disabled

logger = logging.getLogger(__name__)


class SumValue:
    """A value tagged with one variant name and its payload tuple."""

    __slots__ = ("tag", "values")

    _shapes: ClassVar[dict[str, Shape]] = {}
    _str_method: ClassVar[str | None] = None

    def __init__(self, tag: str, values: tuple[Any, ...] = ()) -> None:
        self.tag = tag
        self.values = values

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.tag == other.tag and self.values == other.values

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.tag, self.values))

    def __repr__(self) -> str:
        name = type(self).__name__
        shape = self._shapes.get(self.tag)
        if shape is None or shape.kind is ShapeKind.UNIT:
            return f"{name}.{self.tag}"
        if shape.kind is ShapeKind.NAMED:
            inner = ", ".join(f"{k}={v!r}" for k, v in zip(shape.field_names, self.values))
        else:
            inner = ", ".join(repr(v) for v in self.values)
        return f"{name}.{self.tag}({inner})"

    def __str__(self) -> str:
        if self._str_method is None:
            return repr(self)
        return getattr(self, self._str_method)()


def _constructor(cls_name: str, variant: VariantDescriptor) -> classmethod:
    shape = variant.shape
    tag = variant.name

    def build(cls: type[SumValue], *args: Any, **kwargs: Any) -> SumValue:
        if shape.kind is ShapeKind.NAMED:
            if args or set(kwargs) != set(shape.field_names):
                raise TypeError(
                    f"{cls_name}.{tag} takes keyword fields {', '.join(shape.field_names)}"
                )
            return cls(tag, tuple(kwargs[name] for name in shape.field_names))
        if kwargs or len(args) != shape.field_count:
            raise TypeError(
                f"{cls_name}.{tag} takes {shape.field_count} positional field(s), got {len(args)}"
            )
        return cls(tag, tuple(args))

    build.__name__ = tag
    build.__qualname__ = f"{cls_name}.{tag}"
    return classmethod(build)


def load_generated_module(path: Path, module_name: str) -> ModuleType:
    """Import a generated module from ``path`` without registering it in ``sys.modules``."""
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot load generated module {module_name} from {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _generated_names(declaration: TypeDescriptor, config: GeneratorConfig) -> set[str]:
    names: set[str] = set()
    if "is" in config.derive:
        names.update(
            predicate_name(v, config) for v in declaration.variants if not is_disabled(v)
        )
    if "to_string" in config.derive:
        names.add(config.to_string_name)
    return names


def build_sum_type(
    declaration: TypeDescriptor,
    config: GeneratorConfig | None = None,
    directory: Path | None = None,
) -> type[SumValue]:
    """Create a class for ``declaration`` carrying the generated methods.

    The generated module is written to ``directory`` (kept) or to a temporary
    directory (removed once imported). Disabled variants still get a
    constructor; only the generated methods skip them.
    """
    cfg = config or GeneratorConfig()
    if (cfg.tag_attr, cfg.values_attr) != ("tag", "values"):
        raise ValueError("build_sum_type needs tag_attr='tag' and values_attr='values'")

    source = derive_source(declaration, cfg)
    generated = _generated_names(declaration, cfg)
    clashes = sorted(
        v.name for v in declaration.variants if hasattr(SumValue, v.name) or v.name in generated
    )
    if clashes:
        raise ValueError(
            "variant names clash with SumValue attributes or generated methods: "
            + ", ".join(clashes)
        )

    module_name = f"{snakify(declaration.name)}_derived"
    if directory is not None:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{module_name}.py"
        path.write_text(source)
        module = load_generated_module(path, module_name)
    else:
        with tempfile.TemporaryDirectory(prefix="sumgen-") as tmp:
            path = Path(tmp) / f"{module_name}.py"
            path.write_text(source)
            module = load_generated_module(path, module_name)
    logger.debug("loaded %s from %s", module_name, path)
    mixin = getattr(module, mixin_name(declaration))

    body: dict[str, Any] = {
        "__module__": __name__,
        "_shapes": {v.name: v.shape for v in declaration.variants},
        "_str_method": cfg.to_string_name if "to_string" in cfg.derive else None,
    }
    for variant in declaration.variants:
        body[variant.name] = _constructor(declaration.name, variant)
    logger.debug("built %s with %d variant(s)", declaration.name, len(declaration.variants))
    return type(declaration.name, (mixin, SumValue), body)
