"""Named registry of transformation strategies."""

from rti_repository.protocols import DataTransformationStrategy


class TransformationStrategyFactory:
    """Central place to register and look up transformation strategies.

    Example:
        ```python
        transformations = TransformationStrategyFactory()
        transformations.register("rti-summary", RTISummaryStrategy())

        strategy = transformations.get("rti-summary")
        ```
    """

    def __init__(self) -> None:
        self._strategies: dict[str, DataTransformationStrategy] = {}

    def register(self, key: str, strategy: DataTransformationStrategy) -> None:
        self._strategies[key] = strategy

    def get(self, key: str) -> DataTransformationStrategy | None:
        return self._strategies.get(key)

    def has(self, key: str) -> bool:
        return key in self._strategies

    def clear(self) -> None:
        self._strategies.clear()

    @property
    def keys(self) -> list[str]:
        return list(self._strategies)
