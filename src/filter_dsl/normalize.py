"""
Canonicalize raw (possibly query-string decoded) filter trees.

Query-string decoders turn ``or[0][status][eq]=active`` into mappings keyed
by ``"0"``, ``"1"``, ... instead of lists, and a single ``userId[in]=123``
into a bare scalar. :func:`normalize_operators` repairs both shapes::

    normalize_operators({"userId": {"in": "123"}})
    # {"userId": {"in": ["123"]}}

    normalize_operators({"or": {"0": {"a": 1}, "1": {"b": 2}}})
    # {"or": [{"a": 1}, {"b": 2}]}

The input is never mutated; a new tree is returned.

Known limitation: a mapping whose keys are all non-negative integers is
always read as an encoded list, so a field literally named ``"0"`` cannot be
told apart from the array artifact. An empty mapping decodes to an empty
list for the same reason.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from .operators import SEQUENCE_KEYS

_INDEX_KEY = re.compile(r"\d+", re.ASCII)


def _is_index_key(key: Any) -> bool:
    if isinstance(key, bool):
        return False
    if isinstance(key, int):
        return key >= 0
    return isinstance(key, str) and _INDEX_KEY.fullmatch(key) is not None


def _is_encoded_sequence(value: Mapping[Any, Any]) -> bool:
    # vacuously true for {}: an empty encoded list decodes to []
    return all(_is_index_key(k) for k in value)


def normalize_operators(tree: Any) -> Any:
    """Return the canonical form of *tree*. Never raises."""
    if isinstance(tree, (list, tuple)):
        return [normalize_operators(item) for item in tree]

    if isinstance(tree, Mapping):
        if _is_encoded_sequence(tree):
            ordered = sorted(tree, key=int)
            return [normalize_operators(tree[k]) for k in ordered]

        result: dict[Any, Any] = {}
        for key, value in tree.items():
            normalized = normalize_operators(value)
            if key in SEQUENCE_KEYS and not isinstance(normalized, list):
                normalized = [normalized]
            result[key] = normalized
        return result

    return tree


normalize = normalize_operators
