"""Display template scanner.

Templates use ``str.format`` syntax restricted to named placeholders:
- ``{{`` and ``}}`` are escaped literal braces
- ``{name}`` or ``{name:spec}`` references a field; ``spec`` is kept verbatim
- nested, unbalanced or unclosed braces are rejected
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sumgen.errors import ErrorKind, GenerationError
from sumgen.model import is_identifier


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Placeholder:
    name: str
    spec: str | None = None


@dataclass
class Template:
    source: str
    segments: list[Literal | Placeholder] = field(default_factory=list)

    @property
    def placeholders(self) -> list[str]:
        names: list[str] = []
        for segment in self.segments:
            if isinstance(segment, Placeholder) and segment.name not in names:
                names.append(segment.name)
        return names

    def literal(self) -> str:
        """Render a template without placeholders, escaped braces restored."""
        if self.placeholders:
            raise ValueError(f"template {self.source!r} has placeholders: {self.placeholders}")
        return "".join(s.text for s in self.segments if isinstance(s, Literal))


def _error(kind: ErrorKind, message: str, source: str, position: int) -> GenerationError:
    return GenerationError(kind, message, template=source, position=position)


def parse_template(source: str) -> Template:
    template = Template(source)
    text: list[str] = []
    open_at: int | None = None
    i = 0
    n = len(source)

    def flush() -> None:
        if text:
            template.segments.append(Literal("".join(text)))
            text.clear()

    while i < n:
        ch = source[i]
        if open_at is None:
            if ch == "{" and source.startswith("{{", i):
                text.append("{")
                i += 2
                continue
            if ch == "}" and source.startswith("}}", i):
                text.append("}")
                i += 2
                continue
            if ch == "{":
                flush()
                open_at = i
            elif ch == "}":
                raise _error(
                    ErrorKind.UNMATCHED_CLOSING_BRACKET,
                    "Bracket closed without previous opened bracket",
                    source,
                    i,
                )
            else:
                text.append(ch)
            i += 1
            continue

        if ch == "{":
            raise _error(
                ErrorKind.UNBALANCED_OPEN_BRACKET,
                "Bracket opened without closing previous bracket",
                source,
                i,
            )
        if ch == "}":
            body = source[open_at + 1 : i]
            name, sep, spec = body.partition(":")
            if not is_identifier(name):
                raise _error(
                    ErrorKind.INVALID_IDENTIFIER,
                    f"Invalid identifier {name!r} inside format string bracket",
                    source,
                    open_at,
                )
            template.segments.append(Placeholder(name, spec if sep else None))
            open_at = None
        i += 1

    if open_at is not None:
        raise _error(
            ErrorKind.UNCLOSED_BRACKET,
            "Bracket opened but never closed",
            source,
            open_at,
        )
    flush()
    return template


def capture_placeholders(source: str) -> list[str]:
    """Ordered, de-duplicated field identifiers referenced by ``source``."""
    return parse_template(source).placeholders
