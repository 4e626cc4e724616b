"""Naming utilities for code generation."""

from __future__ import annotations

import re
from functools import lru_cache

RUST_KEYWORDS: frozenset[str] = frozenset({
    "as",
    "async",
    "await",
    "break",
    "const",
    "continue",
    "crate",
    "dyn",
    "else",
    "enum",
    "extern",
    "false",
    "fn",
    "for",
    "if",
    "impl",
    "in",
    "let",
    "loop",
    "match",
    "mod",
    "move",
    "mut",
    "pub",
    "ref",
    "return",
    "self",
    "Self",
    "static",
    "struct",
    "super",
    "trait",
    "true",
    "type",
    "union",
    "unsafe",
    "use",
    "where",
    "while",
})

# Keywords that cannot be written as raw identifiers (r#self is rejected by rustc)
_NON_RAW_KEYWORDS: frozenset[str] = frozenset({"crate", "self", "Self", "super"})

# Common irregular plurals
_IRREGULAR_PLURALS: dict[str, str] = {
    "children": "child",
    "people": "person",
    "men": "man",
    "women": "woman",
    "mice": "mouse",
    "geese": "goose",
    "teeth": "tooth",
    "feet": "foot",
    "data": "datum",
    "criteria": "criterion",
    "analyses": "analysis",
    "indices": "index",
    "appendices": "appendix",
    "matrices": "matrix",
    "vertices": "vertex",
}

# Words that look plural but are not
_UNCOUNTABLE: frozenset[str] = frozenset({
    "equipment",
    "information",
    "metadata",
    "news",
    "series",
    "species",
    "status",
})

# Unicode-aware: any non-word character or underscore separates words
_SEPARATORS = re.compile(r"[\W_]+")


def _split_camel(value: str) -> str:
    """Insert ``_`` at lower-or-digit to upper case boundaries, in any script."""
    chars: list[str] = []
    for prev, char in zip(" " + value, value):
        if char.isupper() and (prev.islower() or prev.isdigit()):
            chars.append("_")
        chars.append(char)
    return "".join(chars)


@lru_cache(maxsize=1024)
def singularize(name: str) -> str:
    """Convert a plural word to singular form.

    Only the last ``_``-separated word of a table name is singularized, so
    ``user_accounts`` becomes ``user_account``. Irregular plurals outside
    the known table are left to the suffix rules.
    """
    head, sep, word = name.rpartition("_")
    if head and word:
        return f"{head}{sep}{singularize(word)}"

    lower = name.lower()
    if lower in _UNCOUNTABLE:
        return name
    if lower in _IRREGULAR_PLURALS:
        # Preserve original case pattern
        singular = _IRREGULAR_PLURALS[lower]
        if name[0].isupper():
            return singular.capitalize()
        return singular

    # Apply rules in order of specificity
    if lower.endswith("ies") and len(name) > 3:
        return name[:-3] + ("Y" if name[-1].isupper() else "y")
    if lower.endswith(("ses", "xes", "zes")) and len(name) > 3:
        return name[:-2]
    if lower.endswith(("ches", "shes")) and len(name) > 4:
        return name[:-2]
    if lower.endswith("s") and not lower.endswith(("ss", "us")) and len(name) > 1:
        return name[:-1]
    return name


@lru_cache(maxsize=1024)
def to_pascal_case(value: str) -> str:
    """Convert a string to PascalCase.

    Any run of non-word characters or underscores acts as a word separator, as do
    lower-to-upper case boundaries.

    Examples:
        >>> to_pascal_case("hello_world")
        'HelloWorld'
        >>> to_pascal_case("in progress")
        'InProgress'
        >>> to_pascal_case("helloWorld")
        'HelloWorld'
    """
    value = _split_camel(value)
    parts = [part for part in _SEPARATORS.split(value) if part]
    return "".join(part.capitalize() for part in parts)


@lru_cache(maxsize=1024)
def to_snake_case(value: str) -> str:
    """Convert a string to snake_case.

    Examples:
        >>> to_snake_case("HelloWorld")
        'hello_world'
        >>> to_snake_case("hello-world")
        'hello_world'
    """
    value = _split_camel(value)
    value = _SEPARATORS.sub("_", value)
    value = re.sub(r"_+", "_", value)
    return value.lower().strip("_")


@lru_cache(maxsize=1024)
def sanitize_type_name(value: str) -> str:
    """Turn a catalog identifier into a valid Rust type or variant name."""
    name = to_pascal_case(value)
    if not name or name[0].isdigit():
        return f"V{name}"
    if name in _NON_RAW_KEYWORDS:
        return f"{name}_"
    return name


@lru_cache(maxsize=1024)
def sanitize_field_name(value: str) -> str:
    """Turn a catalog column name into a valid Rust field name."""
    sanitized = to_snake_case(value)
    if not sanitized or sanitized[0].isdigit():
        sanitized = f"_{sanitized}"
    if sanitized in _NON_RAW_KEYWORDS:
        return f"{sanitized}_"
    if sanitized in RUST_KEYWORDS:
        return f"r#{sanitized}"
    return sanitized
