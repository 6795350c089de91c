"""
Identifier case conversion.

Converts between snake_case, camelCase, PascalCase, kebab-case,
Title Case and CONSTANT_CASE. Every converter returns empty input
unchanged.

Examples:
    >>> snake_case_to_camel_case("_snake_case_test_")
    'snakeCaseTest'
    >>> camel_case_to_snake_case("camelCaseTest")
    'camel_case_test'
    >>> pascal_case_to_kebab_case("PascalCaseTest")
    'pascal-case-test'
    >>> to_constant_case("helloWorld")
    'HELLO_WORLD'
"""

import re

_EDGE_UNDERSCORES = re.compile(r"^_+|_+$")
_EDGE_HYPHENS = re.compile(r"^-+|-+$")
_UNDERSCORE_LETTER = re.compile(r"_([a-zA-Z])")
_UPPERCASE = re.compile(r"([A-Z])")
_FIRST_WORD_CHAR = re.compile(r"^\w")
_LOWER_THEN_UPPER = re.compile(r"([a-z0-9])([A-Z])")


def _upper_first(s: str) -> str:
    return _FIRST_WORD_CHAR.sub(lambda m: m.group(0).upper(), s)


def _lower_first(s: str) -> str:
    return _FIRST_WORD_CHAR.sub(lambda m: m.group(0).lower(), s)


def snake_case_to_camel_case(s: str) -> str:
    """Convert snake_case to camelCase, dropping leading/trailing underscores."""
    if not s:
        return s
    s = _EDGE_UNDERSCORES.sub("", s)
    return _UNDERSCORE_LETTER.sub(lambda m: m.group(1).upper(), s)


def camel_case_to_snake_case(s: str) -> str:
    """Convert camelCase to snake_case."""
    if not s:
        return s
    return _UPPERCASE.sub(r"_\1", s).lower()


def snake_case_to_kebab_case(s: str) -> str:
    if not s:
        return s
    return s.replace("_", "-")


def kebab_case_to_snake_case(s: str) -> str:
    if not s:
        return s
    return s.replace("-", "_")


def camel_case_to_kebab_case(s: str) -> str:
    if not s:
        return s
    return camel_case_to_snake_case(s).replace("_", "-")


def kebab_case_to_camel_case(s: str) -> str:
    if not s:
        return s
    return snake_case_to_camel_case(kebab_case_to_snake_case(s))


def snake_case_to_pascal_case(s: str) -> str:
    if not s:
        return s
    return _upper_first(snake_case_to_camel_case(s))


def pascal_case_to_snake_case(s: str) -> str:
    if not s:
        return s
    return _EDGE_UNDERSCORES.sub("", camel_case_to_snake_case(s))


def kebab_case_to_pascal_case(s: str) -> str:
    if not s:
        return s
    return _upper_first(kebab_case_to_camel_case(s))


def pascal_case_to_kebab_case(s: str) -> str:
    if not s:
        return s
    return _EDGE_HYPHENS.sub("", camel_case_to_kebab_case(s))


def camel_case_to_pascal_case(s: str) -> str:
    if not s:
        return s
    return _upper_first(s)


def pascal_case_to_camel_case(s: str) -> str:
    if not s:
        return s
    return _lower_first(s)


def to_title_case(s: str) -> str:
    """Convert any of the supported cases (or plain words) to Title Case.

    Acronym runs keep only their boundary: ``"parseHTTPRequest"`` becomes
    ``"Parse Http Request"``.
    """
    if not s:
        return s
    s = _LOWER_THEN_UPPER.sub(r"\1 \2", s)
    s = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1 \2", s)
    s = re.sub(r"[_\-]+", " ", s).lower()
    return " ".join(word[:1].upper() + word[1:] for word in re.split(r"\s+", s))


def to_constant_case(s: str) -> str:
    """Convert any of the supported cases (or plain words) to CONSTANT_CASE."""
    if not s:
        return s
    s = _LOWER_THEN_UPPER.sub(r"\1_\2", s)
    s = re.sub(r"([A-Z])([A-Z][a-z])", r"\1_\2", s)
    s = re.sub(r"[\s\-_]+", "_", s)
    return s.upper()


__all__ = [
    "snake_case_to_camel_case",
    "camel_case_to_snake_case",
    "snake_case_to_kebab_case",
    "kebab_case_to_snake_case",
    "camel_case_to_kebab_case",
    "kebab_case_to_camel_case",
    "snake_case_to_pascal_case",
    "pascal_case_to_snake_case",
    "kebab_case_to_pascal_case",
    "pascal_case_to_kebab_case",
    "camel_case_to_pascal_case",
    "pascal_case_to_camel_case",
    "to_title_case",
    "to_constant_case",
]
