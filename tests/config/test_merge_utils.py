from __future__ import annotations

from apifixture.core.utils.merge import deep_merge, merge_arrays


def test_deep_merge_nested_dicts_and_arrays() -> None:
    base = {"a": {"x": 1, "y": [1, 2]}, "b": [1, 2, 3], "c": 1}
    override = {"a": {"y": ["+", 3, 4]}, "b": ["=", 9], "c": 2, "d": "new"}
    merged = deep_merge(base, override)
    assert merged == {"a": {"x": 1, "y": [1, 2, 3, 4]}, "b": [9], "c": 2, "d": "new"}


def test_deep_merge_does_not_mutate_inputs() -> None:
    base = {"a": {"x": 1}}
    override = {"a": {"y": 2}}
    deep_merge(base, override)
    assert base == {"a": {"x": 1}}
    assert override == {"a": {"y": 2}}


def test_scalar_replaces_mapping() -> None:
    assert deep_merge({"a": {"x": 1}}, {"a": None}) == {"a": None}


def test_merge_arrays() -> None:
    assert merge_arrays([1], []) == [1]
    assert merge_arrays([1], [2]) == [2]
    assert merge_arrays([1], ["+", 2]) == [1, 2]
    assert merge_arrays([1], ["="]) == []


def test_only_exact_markers_are_special() -> None:
    assert merge_arrays(["PYTEST_"], ["+COV_", "CI_"]) == ["+COV_", "CI_"]
