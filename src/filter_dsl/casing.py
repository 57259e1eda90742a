"""Key case conversion used when filter keys and column names disagree."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any

_WORD = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")

KeyTransform = Callable[[str], str]


def _split(name: str) -> tuple[str, list[str]]:
    stripped = name.lstrip("_")
    return name[: len(name) - len(stripped)], _WORD.findall(stripped)


def to_snake_case(name: str) -> str:
    """Convert camelCase / PascalCase / kebab-case to snake_case.

    Dotted paths are converted segment by segment
    (``"userProfile.createdAt"`` -> ``"user_profile.created_at"``).
    """
    if "." in name:
        return ".".join(to_snake_case(part) for part in name.split("."))
    prefix, words = _split(name)
    if not words:
        return name
    return prefix + "_".join(w.lower() for w in words)


def to_camel_case(name: str) -> str:
    """Convert snake_case / kebab-case / PascalCase to camelCase.

    Leading underscores are kept (``"_id"`` stays ``"_id"``).
    """
    if "." in name:
        return ".".join(to_camel_case(part) for part in name.split("."))
    prefix, words = _split(name)
    if not words:
        return name
    head, *tail = words
    return prefix + head.lower() + "".join(w.capitalize() for w in tail)


def _flatten(allowed: tuple[str | Iterable[str], ...]) -> set[str]:
    names: set[str] = set()
    for item in allowed:
        if isinstance(item, str):
            names.add(item)
        else:
            names.update(item)
    return names


def _map_keys(
    mapping: Mapping[str, Any],
    transform: KeyTransform,
    allowed: tuple[str | Iterable[str], ...],
) -> dict[str, Any]:
    names = _flatten(allowed)
    return {transform(k): v for k, v in mapping.items() if not names or k in names}


def snake_case_keys(
    mapping: Mapping[str, Any], *allowed: str | Iterable[str]
) -> dict[str, Any]:
    """Return a copy of *mapping* with top-level keys converted to snake_case.

    When *allowed* names are given (as strings or iterables of strings), keys
    not among them are dropped. Names are matched before conversion.
    """
    return _map_keys(mapping, to_snake_case, allowed)


def camel_case_keys(
    mapping: Mapping[str, Any], *allowed: str | Iterable[str]
) -> dict[str, Any]:
    """:func:`snake_case_keys` in the other direction, e.g. as a ``map_row``."""
    return _map_keys(mapping, to_camel_case, allowed)
