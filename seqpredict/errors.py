"""
Error taxonomy shared by the validator, the models and the state store.

Input problems are reported as values (``ValidationResult.error``), never
raised past the validator. Only two situations raise:

  - ``OutOfRangeError`` from ``categorize`` when called outside 1.0..5.0.
  - ``StateDecodeError`` when persisted state cannot be decoded; callers
    decide whether to fall back to defaults.
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    NOT_A_NUMBER = "not_a_number"
    NON_FINITE = "non_finite"
    OUT_OF_RANGE = "out_of_range"
    INSUFFICIENT_DATA = "insufficient_data"
    MISSING_LEARNING_CONTEXT = "missing_learning_context"
    CORRUPT_STATE = "corrupt_state"


class OutOfRangeError(ValueError):
    kind = ErrorKind.OUT_OF_RANGE


class StateDecodeError(ValueError):
    kind = ErrorKind.CORRUPT_STATE
