from __future__ import annotations
from dataclasses import dataclass
import math
import re
from typing import Iterable, List

from seqpredict.errors import ErrorKind

RANGE_MIN = 1.0
RANGE_MAX = 5.0

MESSAGES = {
    ErrorKind.NOT_A_NUMBER: "Please enter a valid number",
    ErrorKind.NON_FINITE: "Please enter a finite number",
    ErrorKind.OUT_OF_RANGE: "Value must be between 1.00 and 5.00",
}

_SEP = re.compile(r"[,\s]+")


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    value: float | None = None
    error: ErrorKind | None = None
    message: str | None = None
    raw: str | None = None


def _fail(kind: ErrorKind, raw=None) -> ValidationResult:
    return ValidationResult(False, None, kind, MESSAGES[kind], None if raw is None else str(raw))


def _to_float(x) -> float | None:
    if isinstance(x, bool):
        return None
    if isinstance(x, (int, float)):
        try:
            return float(x)
        except OverflowError:
            # ints beyond float range
            return math.inf if x > 0 else -math.inf
    if isinstance(x, str):
        try:
            return float(x.strip())
        except ValueError:
            return None
    return None


def validate_value(x, bounded: bool = False) -> ValidationResult:
    """bounded=True is the categorical 1.00-5.00 domain; otherwise any finite real."""
    v = _to_float(x)
    if v is None or math.isnan(v):
        return _fail(ErrorKind.NOT_A_NUMBER, x)
    if math.isinf(v):
        # the bounded domain reports every non-finite input as not-a-number
        return _fail(ErrorKind.NOT_A_NUMBER if bounded else ErrorKind.NON_FINITE, x)
    if bounded and (v < RANGE_MIN or v > RANGE_MAX):
        return _fail(ErrorKind.OUT_OF_RANGE, x)
    return ValidationResult(True, v)


def tokenize(text: str) -> List[str]:
    return [t for t in _SEP.split(text or "") if t.strip() != ""]


def parse_values(raw: str | Iterable, bounded: bool = False) -> tuple[List[float], List[ValidationResult]]:
    """Split on commas/whitespace and validate each token. Returns (accepted, rejected)."""
    tokens = tokenize(raw) if isinstance(raw, str) else list(raw)
    accepted: List[float] = []
    rejected: List[ValidationResult] = []
    for tk in tokens:
        res = validate_value(tk, bounded=bounded)
        if res.valid:
            accepted.append(res.value)
        else:
            rejected.append(res)
    return accepted, rejected
