"""
Shared prediction types and the confidence rules.

A ``Prediction`` is created fresh for every call to ``predict``. Gradient
learners need the exact features (and hidden activation) that produced the
shown probability, so those travel with the prediction in a
``PredictionContext`` that can be consumed once.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import math
from typing import Iterable, List, Optional, Sequence

from seqpredict.core.features import WindowStats
from seqpredict.errors import ErrorKind
from seqpredict.schemas import PredictOut


@dataclass
class PredictionContext:
    features: tuple
    probability: float
    hidden: Optional[float] = None
    consumed: bool = False

    def consume(self) -> Optional["PredictionContext"]:
        if self.consumed:
            return None
        self.consumed = True
        return self


@dataclass
class Prediction:
    decision: str | bool
    confidence: float
    probability: Optional[float] = None
    certainty: Optional[str] = None
    explanation: str = ""
    rough_value: Optional[float] = None
    error: Optional[ErrorKind] = None
    context: Optional[PredictionContext] = field(default=None, repr=False)

    def take_context(self) -> Optional[PredictionContext]:
        if self.context is None:
            return None
        return self.context.consume()

    def to_out(self) -> PredictOut:
        return PredictOut(
            decision=self.decision,
            probability=self.probability,
            confidence=self.confidence,
            certainty=self.certainty,
            explanation=self.explanation or None,
            rough_value=self.rough_value,
            error=str(self.error) if self.error else None,
        )


def certainty_label(confidence: float) -> str:
    if confidence >= 80:
        return "High"
    if confidence >= 60:
        return "Medium"
    return "Low"


def confidence_from_probability(p: float) -> float:
    return min(100.0, abs(p - 0.5) * 200)


def confidence_from_lags(lags: Sequence[int]) -> float:
    """Fewer distinct recent states -> higher confidence (20..100)."""
    if not lags:
        return 0.0
    unique = len(set(lags))
    return float(max(0, min(100, (6 - unique) * 20)))


def explain_threshold(st: WindowStats, probability: float, threshold: float) -> str:
    factors: List[str] = []
    if st.last > threshold:
        factors.append(f"Last value ({st.last:.1f}) already exceeds {threshold:g}")
    if st.mean > threshold:
        factors.append(f"Mean ({st.mean:.1f}) is above {threshold:g}")
    if st.slope > 2:
        factors.append(f"Strong upward trend (+{st.slope:.1f})")
    if st.std > 3:
        factors.append(f"High volatility (σ={st.std:.1f})")
    if not factors:
        if probability > 0.5:
            return f"Model suggests next value will exceed {threshold:g} based on pattern analysis."
        return f"Current pattern suggests next value will remain at or below {threshold:g}."
    return ". ".join(factors) + "."


def all_finite(xs: Iterable[float]) -> bool:
    return all(math.isfinite(x) for x in xs)


def neutral(decision: str | bool, message: str,
            error: ErrorKind = ErrorKind.INSUFFICIENT_DATA) -> Prediction:
    return Prediction(
        decision=decision,
        confidence=0.0,
        probability=0.5 if isinstance(decision, bool) else None,
        certainty="Low",
        explanation=message,
        error=error,
    )


class Predictor(ABC):
    """Contract shared by the three strategies. Subclasses own their parameters."""

    name = "base"
    bounded = False

    @abstractmethod
    def predict(self, values: Sequence[float]) -> Prediction:
        ...

    @abstractmethod
    def learn(self, actual: float, prediction: Prediction, history: Sequence[float]) -> bool:
        """One update for a confirmed outcome. ``history`` already holds ``actual``."""

    @abstractmethod
    def is_correct(self, prediction: Prediction, actual: float) -> bool:
        ...

    @abstractmethod
    def reset(self) -> None:
        ...

    def get_parameters(self) -> Optional[dict]:
        return None

    def set_parameters(self, params: Optional[dict]) -> None:
        pass

    def transitions(self) -> dict:
        return {}

    def load_transitions(self, counts: dict, values: Sequence[float] = ()) -> None:
        pass
