"""Identifier casing conventions.

Word boundaries follow the identifier itself rather than a dictionary:
- lowercase letter followed by an uppercase letter (``horseAnd`` -> ``horse_and``)
- letter followed by a digit and digit followed by a letter (``V2Beta`` -> ``v_2_beta``)
Existing separators are left where they are. Input with no uppercase letter is
already snake_case and comes back unchanged (``horse_and_cart2`` keeps its digit).
"""

from __future__ import annotations

from enum import StrEnum

from sumgen.errors import ErrorKind, GenerationError

SEPARATORS = "_-"


class CaseStyle(StrEnum):
    NONE = "none"
    SNAKE_CASE = "snake_case"
    KEBAB_CASE = "kebab-case"
    CAMEL_CASE = "camelCase"
    PASCAL_CASE = "PascalCase"
    SCREAMING_SNAKE_CASE = "SCREAMING_SNAKE_CASE"
    SCREAMING_KEBAB_CASE = "SCREAMING-KEBAB-CASE"
    LOWERCASE = "lowercase"
    UPPERCASE = "UPPERCASE"
    TITLE_CASE = "Title Case"
    TRAIN_CASE = "Train-Case"

    @classmethod
    def parse(cls, text: str) -> CaseStyle:
        style = _ALIASES.get(text)
        if style is None:
            try:
                style = cls(text)
            except ValueError:
                choices = ", ".join(s.value for s in cls)
                raise GenerationError(
                    ErrorKind.MALFORMED_ATTRIBUTE,
                    f"unknown case style {text!r} (choose from: {choices})",
                ) from None
        return style


_ALIASES: dict[str, CaseStyle] = {
    "camel_case": CaseStyle.CAMEL_CASE,
    "mixed_case": CaseStyle.CAMEL_CASE,
    "pascal_case": CaseStyle.PASCAL_CASE,
    "kebab_case": CaseStyle.KEBAB_CASE,
    "shouty_snake_case": CaseStyle.SCREAMING_SNAKE_CASE,
    "shouty_kebab_case": CaseStyle.SCREAMING_KEBAB_CASE,
    "title_case": CaseStyle.TITLE_CASE,
    "train_case": CaseStyle.TRAIN_CASE,
}


def _starts_word(prev: str, ch: str) -> bool:
    if prev.islower() and ch.isupper():
        return True
    if prev.isalpha() and ch.isdigit():
        return True
    return prev.isdigit() and ch.isalpha()


def snakify(identifier: str) -> str:
    """Convert a PascalCase/camelCase identifier to snake_case."""
    if not any(ch.isupper() for ch in identifier):
        return identifier
    out: list[str] = []
    prev = ""
    for ch in identifier:
        if prev and _starts_word(prev, ch):
            out.append("_")
        out.append(ch)
        prev = ch
    return "".join(out).lower()


def split_words(identifier: str) -> list[str]:
    words = snakify(identifier).replace("-", "_").split("_")
    return [w for w in words if w]


def convert_case(identifier: str, style: CaseStyle | None) -> str:
    if style is None or style is CaseStyle.NONE:
        return identifier
    if style is CaseStyle.SNAKE_CASE:
        return snakify(identifier)
    if style is CaseStyle.LOWERCASE:
        return identifier.lower()
    if style is CaseStyle.UPPERCASE:
        return identifier.upper()

    words = split_words(identifier)
    if style is CaseStyle.KEBAB_CASE:
        return "-".join(words)
    if style is CaseStyle.SCREAMING_SNAKE_CASE:
        return "_".join(w.upper() for w in words)
    if style is CaseStyle.SCREAMING_KEBAB_CASE:
        return "-".join(w.upper() for w in words)

    capitalized = [w.capitalize() for w in words]
    if style is CaseStyle.PASCAL_CASE:
        return "".join(capitalized)
    if style is CaseStyle.CAMEL_CASE:
        return "".join(words[:1] + capitalized[1:])
    if style is CaseStyle.TITLE_CASE:
        return " ".join(capitalized)
    return "-".join(capitalized)
