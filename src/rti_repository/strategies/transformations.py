"""Data transformation strategies.

Each strategy turns raw fetched data into an application-facing shape.
Strategies compose: a repository's pipeline is usually a
ComposedTransformationStrategy of smaller steps, and collection-level
strategies lift an item strategy over a list.
"""

from collections.abc import Callable, Sequence
from typing import Any

from rti_repository.protocols import DataTransformationStrategy, validate_input


def _is_sequence(data: Any) -> bool:
    return isinstance(data, (list, tuple))


def _canonical(data: Any) -> tuple:
    """Type-tagged, order-independent form of ``data``."""
    if isinstance(data, dict):
        items = [(_canonical(key), _canonical(value)) for key, value in data.items()]
        return ("dict", tuple(sorted(items, key=lambda item: repr(item[0]))))
    if isinstance(data, (list, tuple)):
        return (type(data).__name__, tuple(_canonical(item) for item in data))
    if isinstance(data, (set, frozenset)):
        return (type(data).__name__, tuple(sorted((_canonical(item) for item in data), key=repr)))
    return (type(data).__name__, repr(data))


def structural_key(data: Any) -> str:
    """Default memoization key.

    Dict key order does not matter, but types do: ``{1: "a"}`` and
    ``{"1": "a"}`` get different keys, and mixed-type dict keys are fine.
    """
    return repr(_canonical(data))


class IdentityTransformationStrategy:
    """Returns its input unchanged."""

    def transform(self, data: Any) -> Any:
        return data


class ComposedTransformationStrategy:
    """Runs strategies in sequence, feeding each one's output to the next.

    Composition is associative: composing ``[a, b, c]`` gives the same
    result as composing ``[ComposedTransformationStrategy([a, b]), c]``.

    Example:
        ```python
        pipeline = ComposedTransformationStrategy([
            NormalizeStatusStrategy(),
            EnrichQuestionStrategy(),
        ])
        view_model = pipeline.transform(raw)
        ```
    """

    def __init__(self, strategies: Sequence[DataTransformationStrategy]) -> None:
        self._strategies = list(strategies)

    def transform(self, data: Any) -> Any:
        result = data
        for strategy in self._strategies:
            result = strategy.transform(result)
        return result

    def validate(self, data: Any) -> bool:
        """True only if every member strategy accepts ``data``."""
        return all(validate_input(strategy, data) for strategy in self._strategies)

    @property
    def strategies(self) -> list[DataTransformationStrategy]:
        return list(self._strategies)


class ArrayTransformationStrategy:
    """Applies an item strategy to every element, preserving order and length."""

    def __init__(self, item_strategy: DataTransformationStrategy) -> None:
        self._item_strategy = item_strategy

    def transform(self, data: Sequence[Any]) -> list[Any]:
        return [self._item_strategy.transform(item) for item in data]

    def validate(self, data: Any) -> bool:
        if not _is_sequence(data):
            return False
        return all(validate_input(self._item_strategy, item) for item in data)


class FilteringTransformationStrategy:
    """Drops items failing a predicate, then transforms the rest.

    Items are filtered before they are transformed, so rejected items never
    reach the item strategy. Order of the remaining items is preserved.

    Example:
        ```python
        answered = FilteringTransformationStrategy(
            lambda rti: rti["status"] == "answered",
            RTISummaryStrategy(),
        )
        ```
    """

    def __init__(
        self,
        predicate: Callable[[Any], bool],
        item_strategy: DataTransformationStrategy,
    ) -> None:
        self._predicate = predicate
        self._item_strategy = item_strategy

    def transform(self, data: Sequence[Any]) -> list[Any]:
        return [self._item_strategy.transform(item) for item in data if self._predicate(item)]

    def validate(self, data: Any) -> bool:
        return _is_sequence(data)


class ConditionalTransformationStrategy:
    """Sends the whole input to one of two strategies based on a predicate."""

    def __init__(
        self,
        condition: Callable[[Any], bool],
        true_strategy: DataTransformationStrategy,
        false_strategy: DataTransformationStrategy,
    ) -> None:
        self._condition = condition
        self._true_strategy = true_strategy
        self._false_strategy = false_strategy

    def _select(self, data: Any) -> DataTransformationStrategy:
        return self._true_strategy if self._condition(data) else self._false_strategy

    def transform(self, data: Any) -> Any:
        return self._select(data).transform(data)

    def validate(self, data: Any) -> bool:
        return validate_input(self._select(data), data)


class MemoizedTransformationStrategy:
    """Caches the wrapped strategy's output per input key.

    Structurally equal inputs map to the same key, so the wrapped strategy
    runs once per distinct input. The memo has no TTL and no eviction; it
    only shrinks through ``clear_cache()``.
    """

    def __init__(
        self,
        strategy: DataTransformationStrategy,
        key_generator: Callable[[Any], str] | None = None,
    ) -> None:
        """Initialize the memoizing wrapper.

        Args:
            strategy: The (expensive) strategy to wrap.
            key_generator: Maps an input to its memo key. Defaults to structural_key.
        """
        self._strategy = strategy
        self._key_generator = key_generator or structural_key
        self._memo: dict[str, Any] = {}

    def transform(self, data: Any) -> Any:
        key = self._key_generator(data)
        if key in self._memo:
            return self._memo[key]

        result = self._strategy.transform(data)
        self._memo[key] = result
        return result

    def validate(self, data: Any) -> bool:
        return validate_input(self._strategy, data)

    def clear_cache(self) -> None:
        self._memo.clear()

    @property
    def cache_size(self) -> int:
        """Number of memoized results."""
        return len(self._memo)
