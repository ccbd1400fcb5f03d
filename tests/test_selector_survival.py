"""Tests for the rule survival decision."""

import pytest

from prune_tools import selector_survival
from prune_tools.selector_survival import (
    class_survives,
    selector_classes,
    should_keep,
    survival_reason,
)


class TestSelectorClasses:
    def test_compound(self):
        assert selector_classes(".a.b") == ["a", "b"]

    def test_selector_list(self):
        assert selector_classes(".x, .y > .z") == ["x", "y", "z"]

    def test_functional_pseudo_and_attribute(self):
        sel = ".a:not(.b) > .c[data-x='.d']"
        assert selector_classes(sel) == ["a", "b", "c"]

    def test_element_only(self):
        assert selector_classes("div > p") == []


class TestShouldKeep:
    def test_used_class_kept(self):
        assert should_keep(".foo", {"foo", "bar"}, []) is True

    def test_unused_class_dropped(self):
        assert should_keep(".baz", {"foo", "bar"}, []) is False

    @pytest.mark.parametrize("selector", ["div", "#main", "a:hover", "*", "[hidden]", "body .baz", ":root"])
    def test_non_class_selectors_always_kept(self, selector):
        assert should_keep(selector, set(), []) is True

    def test_leading_whitespace_still_class_selector(self):
        assert should_keep("  .gone", {"other"}, []) is False

    def test_substring_of_used_class(self):
        assert should_keep(".btn", {"btn-primary"}, []) is True

    def test_used_class_is_substring(self):
        # over-retention from the fuzzy fallback is expected
        assert should_keep(".btn-primary-lg", {"btn"}, []) is True

    def test_unrelated_class_dropped(self):
        assert should_keep(".card", {"btn"}, []) is False

    def test_ignored_prefix(self):
        assert should_keep(".ant-button", set(), ["ant"]) is True

    def test_ignored_prefix_is_textual(self):
        assert should_keep(".antenna", set(), ["ant"]) is True
        assert should_keep(".giant", set(), ["ant"]) is False

    def test_any_class_in_compound(self):
        assert should_keep(".a.b", {"b"}, []) is True

    def test_any_branch_of_list(self):
        assert should_keep(".x, .y", {"y"}, []) is True
        assert should_keep(".x, .y", {"zzz"}, []) is False

    def test_descendant_classes(self):
        assert should_keep(".gone .kept", {"kept"}, []) is True

    def test_no_class_reference_fails_open(self):
        assert should_keep(".", set(), []) is True

    def test_parse_failure_fails_open(self, monkeypatch):
        def boom(selector):
            raise ValueError("tokenizer exploded")

        monkeypatch.setattr(selector_survival, "selector_classes", boom)
        assert should_keep(".never-used", set(), []) is True

    def test_empty_used_class_never_matches_everything(self):
        assert should_keep(".gone", {""}, []) is False

    def test_repeat_evaluation_is_stable(self):
        used = {"foo"}
        assert should_keep(".foo", used, []) == should_keep(".foo", used, [])


class TestSurvivalReason:
    def test_reasons(self):
        used = {"btn-primary", "card"}
        assert survival_reason("card", used, ["mat-"]) == "used"
        assert survival_reason("mat-icon", used, ["mat-"]) == "ignored-prefix"
        assert survival_reason("btn", used, ["mat-"]) == "fuzzy"
        assert survival_reason("hero", used, ["mat-"]) is None

    def test_class_survives(self):
        assert class_survives("x", {"x"}, []) is True
        assert class_survives("q", {"x"}, []) is False
