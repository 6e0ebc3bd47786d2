"""
Exceptions raised by the TPC-C population generator.

Configuration problems are reported before any data is drawn; invariant
violations indicate a defect in the generator itself and are never retried.
"""

from typing import Any


class TpccDataGenException(Exception):
    """Root of every error the generator raises."""


class ConfigurationError(TpccDataGenException):
    """A scale parameter or generator bound is invalid."""

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        invalid_value: Any = None,
        validation_errors: list[str] | None = None,
    ):
        self.parameter = parameter
        self.invalid_value = invalid_value
        self.validation_errors = list(validation_errors or [])

        parts = [message]
        if parameter:
            parts.append(f"Parameter: {parameter}")
        if invalid_value is not None:
            parts.append(f"Value: {invalid_value}")
        parts += [f"Validation error: {error}" for error in self.validation_errors]

        super().__init__(" | ".join(parts))


class InvariantViolationError(TpccDataGenException):
    """Generated data breaks a population rule (bijection, cardinality, marker)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.details = dict(details or {})
        if self.details:
            rendered = ", ".join(f"{key}: {value}" for key, value in self.details.items())
            message = f"{message} ({rendered})"
        super().__init__(message)


class WarehouseGenerationError(TpccDataGenException):
    """A warehouse sub-tree could not be generated.

    The whole warehouse batch is unusable; nothing from it is returned.
    """

    def __init__(self, warehouse_id: int, original_error: Exception | None = None):
        self.warehouse_id = warehouse_id
        self.original_error = original_error

        message = f"Generation failed for warehouse {warehouse_id}"
        if original_error is not None:
            message += f": {type(original_error).__name__}: {original_error}"
        super().__init__(message)


class GenerationCancelledError(TpccDataGenException):
    """A warehouse job was cancelled before it started."""

    def __init__(self, warehouse_id: int):
        self.warehouse_id = warehouse_id
        super().__init__(f"Generation cancelled before warehouse {warehouse_id}")
