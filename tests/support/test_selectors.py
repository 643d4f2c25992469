"""Tests for selector resolution and matching used by pluck() and filter()."""

import pytest as _pytest

import attrbag.support._frozen as _frozen
import attrbag.support._selectors as _selectors


class TestAsSelector:
    """Tests for shorthand resolution."""

    def test_string_is_path_value(self) -> None:
        """Strings select the value at a path."""
        assert _selectors.as_selector("profile.name") == _selectors.PathValue("profile.name")

    def test_pair_is_path_equals(self) -> None:
        """(path, value) pairs compare the value at a path."""
        assert _selectors.as_selector(("active", True)) == _selectors.PathEquals("active", True)
        assert _selectors.as_selector(["role", "admin"]) == _selectors.PathEquals("role", "admin")

    def test_mapping_is_partial_match(self) -> None:
        """Mappings are partial-match patterns."""
        selector = _selectors.as_selector({"role": "admin"})

        assert isinstance(selector, _selectors.PartialMatch)
        assert selector.pattern == {"role": "admin"}

    def test_callable_is_predicate(self) -> None:
        """Callables are predicates."""

        def fn(value: object, key: object) -> bool:
            return True

        assert _selectors.as_selector(fn) == _selectors.Predicate(fn)

    def test_none_is_identity(self) -> None:
        """None selects the item itself."""
        assert _selectors.as_selector(None) == _selectors.Identity()

    def test_selector_passes_through(self) -> None:
        """Explicit selectors are returned unchanged."""
        selector = _selectors.PathValue("x")

        assert _selectors.as_selector(selector) is selector

    @_pytest.mark.parametrize("value", [42, 1.5, ("a", "b", "c")])
    def test_unsupported_raises(self, value: object) -> None:
        """Other values are rejected."""
        with _pytest.raises(TypeError, match="Unsupported selector"):
            _selectors.as_selector(value)


class TestIsMatch:
    """Tests for partial deep comparison."""

    def test_partial_mapping(self) -> None:
        """Extra keys in the item are ignored."""
        assert _selectors.is_match({"a": 1, "b": 2}, {"a": 1})
        assert not _selectors.is_match({"a": 1}, {"a": 2})
        assert not _selectors.is_match({"a": 1}, {"c": 1})

    def test_nested_partial_mapping(self) -> None:
        """Nested mappings match partially too."""
        item = {"profile": {"name": "ada", "age": 36}}

        assert _selectors.is_match(item, {"profile": {"name": "ada"}})
        assert not _selectors.is_match(item, {"profile": {"name": "bob"}})

    def test_frozen_item(self) -> None:
        """Frozen items match like dicts."""
        item = _frozen.freeze({"profile": {"name": "ada"}})

        assert _selectors.is_match(item, {"profile": {"name": "ada"}})

    def test_list_pattern_is_subset(self) -> None:
        """Every pattern element must match some element of the item's list."""
        item = {"tags": ["ops", "dev"]}

        assert _selectors.is_match(item, {"tags": ["dev"]})
        assert _selectors.is_match(item, {"tags": []})
        assert not _selectors.is_match(item, {"tags": ["qa"]})
        assert not _selectors.is_match({"tags": "dev"}, {"tags": ["dev"]})

    def test_empty_pattern_matches_everything(self) -> None:
        """An empty pattern has nothing to fail."""
        assert _selectors.is_match({"a": 1}, {})

    def test_scalar_item_against_mapping(self) -> None:
        """Scalars have no keys to match."""
        assert not _selectors.is_match(5, {"a": 1})


class TestApplySelector:
    """Tests for apply_selector()."""

    def test_identity(self) -> None:
        assert _selectors.apply_selector(_selectors.Identity(), {"a": 1}, "k") == {"a": 1}

    def test_predicate_receives_item_and_key(self) -> None:
        """Predicates are called with (item, key)."""
        seen: list[tuple[object, object]] = []

        def fn(value: object, key: object) -> str:
            seen.append((value, key))
            return "result"

        assert _selectors.apply_selector(_selectors.Predicate(fn), 1, "k") == "result"
        assert seen == [(1, "k")]

    def test_path_value(self) -> None:
        """Path values resolve inside the item; absent paths give None."""
        item = {"profile": {"name": "ada"}}

        assert _selectors.apply_selector(_selectors.PathValue("profile.name"), item, "k") == "ada"
        assert _selectors.apply_selector(_selectors.PathValue("profile.age"), item, "k") is None

    def test_path_value_custom_separator(self) -> None:
        """Path selectors use the given separator."""
        item = {"profile": {"name": "ada"}}

        result = _selectors.apply_selector(_selectors.PathValue("profile/name"), item, "k", "/")

        assert result == "ada"

    def test_path_equals(self) -> None:
        """PathEquals needs the path to exist and be equal."""
        item = {"role": None}

        assert _selectors.apply_selector(_selectors.PathEquals("role", None), item, "k") is True
        assert _selectors.apply_selector(_selectors.PathEquals("other", None), item, "k") is False

    def test_partial_match(self) -> None:
        """PartialMatch gives a boolean verdict."""
        item = {"role": "admin", "name": "ada"}

        assert _selectors.apply_selector(_selectors.PartialMatch({"role": "admin"}), item, "k") is True
