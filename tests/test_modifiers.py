import pytest

from schematic.modifiers import ModifierError, predefined_modifiers, strip_last_prefix


def test_strips_matching_prefix():
    result = strip_last_prefix(["deployment", "helm-app"], ["helm-", "ansible-"])
    assert result == ["deployment", "app"]


def test_second_prefix_matches():
    result = strip_last_prefix(["deployment", "ansible-app"], ["helm-", "ansible-"])
    assert result == ["deployment", "app"]


def test_only_one_prefix_stripped():
    assert strip_last_prefix(["x", "helm-helm-app"], ["helm-", "helm-"]) == ["x", "helm-app"]


def test_first_matching_argument_wins():
    assert strip_last_prefix(["ab"], ["a", "ab"]) == ["b"]


def test_no_match_leaves_value_unchanged():
    assert strip_last_prefix(["x", "project"], ["helm-"]) == ["x", "project"]


def test_only_last_segment_affected():
    assert strip_last_prefix(["helm-a", "helm-b"], ["helm-"]) == ["helm-a", "b"]


def test_empty_prefix_strips_nothing():
    assert strip_last_prefix(["helm-a"], ["", "helm-"]) == ["helm-a"]


def test_empty_variable():
    assert strip_last_prefix([], ["helm-"]) == []


def test_no_arguments_raises():
    with pytest.raises(ModifierError, match="expected at least 1 argument, found 0"):
        strip_last_prefix(["a"], [])


def test_input_is_not_mutated():
    variable = ["a", "helm-b"]
    strip_last_prefix(variable, ["helm-"])
    assert variable == ["a", "helm-b"]


def test_predefined_modifiers_contains_strip_last_prefix():
    modifiers = predefined_modifiers()
    assert modifiers["strip_last_prefix"] is strip_last_prefix


def test_predefined_modifiers_are_fresh_each_call():
    first = predefined_modifiers()
    first.clear()
    assert "strip_last_prefix" in predefined_modifiers()