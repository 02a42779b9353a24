"""
Tests for the transformation strategies and their registry.
"""

import pytest

from rti_repository.protocols import (
    DataTransformationStrategy,
    ValidatingTransformationStrategy,
    validate_input,
)
from rti_repository.services import TransformationStrategyFactory
from rti_repository.strategies import (
    ArrayTransformationStrategy,
    ComposedTransformationStrategy,
    ConditionalTransformationStrategy,
    FilteringTransformationStrategy,
    IdentityTransformationStrategy,
    MemoizedTransformationStrategy,
)


class Double:
    """Doubles numbers and counts how often it ran."""

    def __init__(self) -> None:
        self.calls = 0

    def transform(self, data: int) -> int:
        self.calls += 1
        return data * 2

    def validate(self, data) -> bool:
        return isinstance(data, int)


class AddOne:
    def transform(self, data: int) -> int:
        return data + 1


class Summarize:
    """Turns a raw RTI record into a summary view-model."""

    def __init__(self) -> None:
        self.calls = 0

    def transform(self, data: dict) -> dict:
        self.calls += 1
        return {"id": data["id"], "title": data["subject"].title()}

    def validate(self, data) -> bool:
        return isinstance(data, dict) and "id" in data and "subject" in data


def is_even(value: int) -> bool:
    return value % 2 == 0


def test_identity_returns_input():
    """Identity hands back the very same object."""
    payload = {"a": [1, 2]}
    assert IdentityTransformationStrategy().transform(payload) is payload


def test_strategies_satisfy_protocol():
    """Every strategy is a DataTransformationStrategy."""
    strategies = [
        IdentityTransformationStrategy(),
        ComposedTransformationStrategy([]),
        ArrayTransformationStrategy(Double()),
        FilteringTransformationStrategy(is_even, Double()),
        ConditionalTransformationStrategy(is_even, Double(), AddOne()),
        MemoizedTransformationStrategy(Double()),
    ]
    for strategy in strategies:
        assert isinstance(strategy, DataTransformationStrategy)


def test_validate_input_without_validator_is_true():
    """Strategies without validate() accept everything."""
    assert validate_input(AddOne(), "anything") is True
    assert validate_input(Double(), "not-an-int") is False


def test_validating_protocol_detects_validate():
    """Only strategies with validate() are validating strategies."""
    assert isinstance(Double(), ValidatingTransformationStrategy)
    assert not isinstance(AddOne(), ValidatingTransformationStrategy)


class TestComposedTransformationStrategy:
    """Test cases for ComposedTransformationStrategy."""

    @pytest.mark.parametrize("x", [-3, 0, 5, 100])
    def test_equals_sequential_application(self, x):
        """Composing [a, b] equals b(a(x))."""
        a, b = AddOne(), Double()
        composed = ComposedTransformationStrategy([a, b])

        assert composed.transform(x) == b.transform(a.transform(x))

    def test_composition_is_associative(self):
        """Nesting compositions does not change the result."""
        a, b, c = AddOne(), Double(), AddOne()
        flat = ComposedTransformationStrategy([a, b, c])
        left = ComposedTransformationStrategy([ComposedTransformationStrategy([a, b]), c])
        right = ComposedTransformationStrategy([a, ComposedTransformationStrategy([b, c])])

        assert flat.transform(4) == left.transform(4) == right.transform(4) == 11

    def test_empty_composition_is_identity(self):
        assert ComposedTransformationStrategy([]).transform("x") == "x"

    def test_validate_is_and_of_members(self):
        """All members must accept the input; members without validate accept it."""
        composed = ComposedTransformationStrategy([AddOne(), Double()])

        assert composed.validate(3) is True
        assert composed.validate("3") is False


class TestArrayTransformationStrategy:
    """Test cases for ArrayTransformationStrategy."""

    def test_maps_preserving_order_and_length(self):
        strategy = ArrayTransformationStrategy(Double())
        assert strategy.transform([3, 1, 2]) == [6, 2, 4]

    def test_validate_requires_sequence(self):
        strategy = ArrayTransformationStrategy(AddOne())

        assert strategy.validate([1, "x"]) is True
        assert strategy.validate((1, 2)) is True
        assert strategy.validate({"a": 1}) is False
        assert strategy.validate("123") is False

    def test_validate_checks_every_item(self):
        strategy = ArrayTransformationStrategy(Double())

        assert strategy.validate([1, 2, 3]) is True
        assert strategy.validate([1, "2", 3]) is False


class TestFilteringTransformationStrategy:
    """Test cases for FilteringTransformationStrategy."""

    def test_filters_then_transforms(self):
        """Only items passing the predicate are transformed and returned."""
        double = Double()
        strategy = FilteringTransformationStrategy(is_even, double)

        assert strategy.transform([1, 2, 3, 4]) == [4, 8]
        assert double.calls == 2

    def test_rejecting_everything_gives_empty_list(self):
        strategy = FilteringTransformationStrategy(lambda _: False, Double())
        assert strategy.transform([1, 2]) == []

    def test_validate_requires_sequence(self):
        strategy = FilteringTransformationStrategy(is_even, Double())

        assert strategy.validate([1, 2]) is True
        assert strategy.validate(12) is False


class TestConditionalTransformationStrategy:
    """Test cases for ConditionalTransformationStrategy."""

    def test_dispatches_whole_input_to_one_branch(self):
        strategy = ConditionalTransformationStrategy(is_even, Double(), AddOne())

        assert strategy.transform(4) == 8
        assert strategy.transform(5) == 6

    def test_predicate_evaluated_once_per_call(self):
        seen = []

        def condition(data):
            seen.append(data)
            return True

        ConditionalTransformationStrategy(condition, AddOne(), Double()).transform(1)
        assert seen == [1]

    def test_validate_uses_selected_branch(self):
        """Validation is delegated to the branch the input would take."""
        strategy = ConditionalTransformationStrategy(
            lambda data: isinstance(data, dict),
            Summarize(),
            Double(),
        )

        assert strategy.validate({"id": 1, "subject": "water"}) is True
        assert strategy.validate({"id": 1}) is False
        assert strategy.validate(3) is True
        assert strategy.validate("3") is False


class TestMemoizedTransformationStrategy:
    """Test cases for MemoizedTransformationStrategy."""

    def test_structurally_equal_input_transforms_once(self):
        """Equal structures, even with different key order, hit the memo."""
        summarize = Summarize()
        strategy = MemoizedTransformationStrategy(summarize)

        first = strategy.transform({"id": "RTI-1", "subject": "school meals"})
        second = strategy.transform({"subject": "school meals", "id": "RTI-1"})

        assert first == second == {"id": "RTI-1", "title": "School Meals"}
        assert summarize.calls == 1
        assert strategy.cache_size == 1

    def test_different_input_transforms_again(self):
        double = Double()
        strategy = MemoizedTransformationStrategy(double)

        assert strategy.transform(1) == 2
        assert strategy.transform(2) == 4
        assert double.calls == 2

    def test_clear_cache_forces_recompute(self):
        double = Double()
        strategy = MemoizedTransformationStrategy(double)
        strategy.transform(1)

        strategy.clear_cache()
        strategy.transform(1)

        assert double.calls == 2
        assert strategy.cache_size == 1

    def test_custom_key_generator(self):
        """A coarse key function makes distinct inputs share a result."""
        summarize = Summarize()
        strategy = MemoizedTransformationStrategy(summarize, key_generator=lambda data: data["id"])

        strategy.transform({"id": "RTI-1", "subject": "roads"})
        result = strategy.transform({"id": "RTI-1", "subject": "bridges"})

        assert result["title"] == "Roads"
        assert summarize.calls == 1

    def test_mixed_type_dict_keys(self):
        """Dicts mixing int and str keys are memoized without error."""
        strategy = MemoizedTransformationStrategy(IdentityTransformationStrategy())
        payload = {1: "a", "b": 2}

        assert strategy.transform(payload) == payload
        assert strategy.transform({"b": 2, 1: "a"}) is strategy.transform(payload)
        assert strategy.cache_size == 1

    def test_int_and_str_keys_do_not_collide(self):
        strategy = MemoizedTransformationStrategy(IdentityTransformationStrategy())

        assert strategy.transform({1: "a"}) == {1: "a"}
        assert strategy.transform({"1": "a"}) == {"1": "a"}
        assert strategy.cache_size == 2

    def test_set_and_its_repr_do_not_collide(self):
        strategy = MemoizedTransformationStrategy(IdentityTransformationStrategy())

        assert strategy.transform({"tags": {"water"}}) == {"tags": {"water"}}
        assert strategy.transform({"tags": "{'water'}"}) == {"tags": "{'water'}"}
        assert strategy.cache_size == 2

    def test_validate_delegates(self):
        strategy = MemoizedTransformationStrategy(Double())

        assert strategy.validate(1) is True
        assert strategy.validate("1") is False


class TestTransformationStrategyFactory:
    """Test cases for TransformationStrategyFactory."""

    def test_register_and_lookup(self):
        transformations = TransformationStrategyFactory()
        summary = Summarize()
        transformations.register("rti-summary", summary)

        assert transformations.has("rti-summary") is True
        assert transformations.get("rti-summary") is summary
        assert transformations.get("missing") is None
        assert transformations.keys == ["rti-summary"]

    def test_clear(self):
        transformations = TransformationStrategyFactory()
        transformations.register("identity", IdentityTransformationStrategy())
        transformations.clear()

        assert transformations.has("identity") is False
