"""Tests for the filter tree normalizer."""

from __future__ import annotations

import pytest

from filter_dsl.normalize import normalize, normalize_operators


def test_scalar_under_in_is_wrapped():
    assert normalize({"userId": {"in": "123"}}) == {"userId": {"in": ["123"]}}


def test_encoded_or_becomes_list():
    raw = {
        "or": {
            "0": {"status": {"eq": "active"}},
            "1": {"role": {"eq": "admin"}},
        }
    }
    assert normalize(raw) == {
        "or": [
            {"status": {"eq": "active"}},
            {"role": {"eq": "admin"}},
        ]
    }


def test_index_keys_sort_numerically():
    raw = {"tags": {"in": {"10": "k", "2": "c", "0": "a", "1": "b"}}}
    assert normalize(raw) == {"tags": {"in": ["a", "b", "c", "k"]}}


def test_integer_index_keys():
    assert normalize({"and": {1: {"b": 2}, 0: {"a": 1}}}) == {
        "and": [{"a": 1}, {"b": 2}]
    }


def test_nested_artifacts_are_repaired():
    raw = {
        "or": {
            "0": {"userId": {"nin": "1"}},
            "1": {"and": {"0": {"age": {"gte": 18}}}},
        }
    }
    assert normalize(raw) == {
        "or": [
            {"userId": {"nin": ["1"]}},
            {"and": [{"age": {"gte": 18}}]},
        ]
    }


def test_single_tree_under_logical_key_is_wrapped():
    assert normalize({"and": {"status": "active"}}) == {"and": [{"status": "active"}]}


def test_existing_lists_are_kept():
    tree = {"userId": {"in": ["1", "2"]}, "or": [{"a": 1}]}
    assert normalize(tree) == tree


@pytest.mark.parametrize("value", [None, 0, "x", 1.5, True])
def test_scalars_pass_through(value):
    assert normalize(value) == value


def test_empty_input():
    assert normalize({}) == []
    assert normalize([]) == []


def test_empty_mapping_is_an_empty_sequence():
    assert normalize({"meta": {}}) == {"meta": []}
    assert normalize({"status": {"in": {}}}) == {"status": {"in": []}}
    assert normalize({"or": {}}) == {"or": []}


def test_unknown_operators_untouched():
    assert normalize({"age": {"between": "1"}}) == {"age": {"between": "1"}}


def test_nin_none_is_wrapped():
    assert normalize({"x": {"nin": None}}) == {"x": {"nin": [None]}}


def test_input_not_mutated():
    raw = {"or": {"0": {"a": {"in": "1"}}}}
    normalize(raw)
    assert raw == {"or": {"0": {"a": {"in": "1"}}}}


def test_mixed_keys_are_not_a_sequence():
    assert normalize({"0": "a", "name": "b"}) == {"0": "a", "name": "b"}


@pytest.mark.parametrize(
    "raw",
    [
        {"userId": {"in": "123"}},
        {"or": {"0": {"status": "a"}, "1": {"in": "x"}}},
        {"a": [{"in": 1}, {"nin": {"0": 2}}]},
        {"and": {"0": {"or": {"0": {"x": 1}}}}},
        ("a", {"in": 1}),
    ],
)
def test_idempotent(raw):
    once = normalize_operators(raw)
    assert normalize_operators(once) == once
