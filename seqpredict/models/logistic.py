from __future__ import annotations
import logging
from typing import Optional, Sequence

from pydantic import ValidationError

from seqpredict.core.activations import sigmoid
from seqpredict.core.features import logistic_features, window_stats
from seqpredict.errors import ErrorKind, StateDecodeError
from seqpredict.models.base import (
    Prediction,
    PredictionContext,
    Predictor,
    all_finite,
    certainty_label,
    confidence_from_probability,
    explain_threshold,
    neutral,
)
from seqpredict.schemas import LogisticParams

logger = logging.getLogger(__name__)

DECAY = 0.85
MIN_HISTORY = 2
DECISION_THRESHOLD = 0.5


class LogisticPredictor(Predictor):
    """Spike probability from weighted mean/std/slope through a logistic link."""

    name = "logistic"

    def __init__(self, learning_rate: float = 0.01, threshold: float = 7.0):
        self.lr = learning_rate
        self.threshold = threshold
        self.params = LogisticParams()

    def score(self, mean: float, std: float, slope: float) -> tuple[float, float]:
        p = self.params
        z = p.intercept + p.mean_weight * mean + p.std_weight * std + p.slope_weight * slope
        return z, sigmoid(z)

    def predict(self, values: Sequence[float]) -> Prediction:
        if len(values) < MIN_HISTORY:
            return neutral(False, f"Need at least {MIN_HISTORY} values for a prediction.")
        st = window_stats(values, DECAY)
        F = logistic_features(st)
        z, prob = self.score(*F)
        if not all_finite(F + [z]):
            logger.warning("window statistics overflow, returning neutral prediction")
            return neutral(False, "Values too large to score.", ErrorKind.NON_FINITE)
        conf = confidence_from_probability(prob)
        return Prediction(
            decision=prob > DECISION_THRESHOLD,
            confidence=conf,
            probability=prob,
            certainty=certainty_label(conf),
            explanation=explain_threshold(st, prob, self.threshold),
            context=PredictionContext(features=tuple(F), probability=prob),
        )

    def learn(self, actual: float, prediction: Prediction, history: Sequence[float]) -> bool:
        ctx = prediction.take_context()
        if ctx is None:
            logger.warning("skipping update: prediction carries no learning context")
            return False
        target = 1.0 if actual > self.threshold else 0.0
        error = target - ctx.probability
        mean, std, slope = ctx.features
        p = self.params
        step = self.lr * error
        new = (p.intercept + step, p.mean_weight + step * mean,
               p.std_weight + step * std, p.slope_weight + step * slope)
        if not all_finite(new):
            logger.warning("skipping update: step overflows the weights")
            return False
        p.intercept, p.mean_weight, p.std_weight, p.slope_weight = new
        logger.debug("logistic update: target=%s error=%.4f", target, error)
        return True

    def is_correct(self, prediction: Prediction, actual: float) -> bool:
        return prediction.decision == (actual > self.threshold)

    def reset(self) -> None:
        self.params = LogisticParams()

    def get_parameters(self) -> Optional[dict]:
        return self.params.model_dump()

    def set_parameters(self, params: Optional[dict]) -> None:
        if params is None:
            self.reset()
            return
        try:
            self.params = LogisticParams.model_validate(params)
        except ValidationError as exc:
            raise StateDecodeError(f"invalid logistic parameters: {exc}") from exc
