"""Data transformation strategy protocol.

A transformation strategy shapes a raw payload into an application
view-model. Strategies may optionally expose ``validate``; callers use
``validate_input`` so that strategies without it count as always-valid.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DataTransformationStrategy(Protocol):
    """Protocol for transformation strategies.

    Example:
        ```python
        from rti_repository.protocols import DataTransformationStrategy

        strategy: DataTransformationStrategy = IdentityTransformationStrategy()
        strategy: DataTransformationStrategy = ArrayTransformationStrategy(item_strategy)
        ```
    """

    def transform(self, data: Any) -> Any:
        """Transform input data to the output format.

        Args:
            data: The input data to transform

        Returns:
            The transformed data
        """
        ...


@runtime_checkable
class ValidatingTransformationStrategy(DataTransformationStrategy, Protocol):
    """Transformation strategy that can also validate its input."""

    def validate(self, data: Any) -> bool:
        """Validate input data before transformation.

        Args:
            data: The input data to validate

        Returns:
            True if valid, False otherwise
        """
        ...


def validate_input(strategy: DataTransformationStrategy, data: Any) -> bool:
    """Run the strategy's validator, treating a missing one as always-valid."""
    if isinstance(strategy, ValidatingTransformationStrategy):
        return bool(strategy.validate(data))
    return True
