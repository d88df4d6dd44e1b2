"""
One-hidden-unit network over eight window features.

    h = tanh(b1 + W1 . F)
    p = sigmoid(W2 * h + b2)

The decision threshold sits at 0.55 rather than 0.5 to favour precision.
"""
from __future__ import annotations
import logging
from typing import Optional, Sequence

import numpy as np
from pydantic import ValidationError

from seqpredict.core.activations import sigmoid, tanh
from seqpredict.core.features import network_features, window_stats
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
from seqpredict.schemas import NeuralParams

logger = logging.getLogger(__name__)

DECAY = 0.85
DECISION_THRESHOLD = 0.55


class NeuralPredictor(Predictor):
    name = "neural"

    def __init__(self, learning_rate: float = 0.01, threshold: float = 7.0):
        self.lr = learning_rate
        self.threshold = threshold
        self.params = NeuralParams()

    def forward(self, F: Sequence[float]) -> tuple[float, float]:
        """Returns (hidden activation, probability)."""
        p = self.params
        hz = p.b1 + float(np.dot(F, p.w1))
        h = tanh(hz)
        return h, sigmoid(p.w2 * h + p.b2)

    def predict(self, values: Sequence[float]) -> Prediction:
        if not values:
            return neutral(False, "No data available for prediction.")
        st = window_stats(values, DECAY)
        F = network_features(st)
        with np.errstate(over="ignore", invalid="ignore"):
            h, prob = self.forward(F)
        if not all_finite(F + [h, prob]):
            logger.warning("network input overflow, returning neutral prediction")
            return neutral(False, "Values too large to score.", ErrorKind.NON_FINITE)
        conf = confidence_from_probability(prob)
        return Prediction(
            decision=prob > DECISION_THRESHOLD,
            confidence=conf,
            probability=prob,
            certainty=certainty_label(conf),
            explanation=explain_threshold(st, prob, self.threshold),
            context=PredictionContext(features=tuple(F), probability=prob, hidden=h),
        )

    def learn(self, actual: float, prediction: Prediction, history: Sequence[float]) -> bool:
        ctx = prediction.take_context()
        if ctx is None or ctx.hidden is None:
            logger.warning("skipping update: features or hidden activation missing")
            return False
        target = 1.0 if actual > self.threshold else 0.0
        error = target - ctx.probability
        step = self.lr * error
        p = self.params
        w1 = [w + step * f for w, f in zip(p.w1, ctx.features)]
        if not all_finite(w1):
            logger.warning("skipping update: step overflows the hidden weights")
            return False
        p.w1 = w1
        p.b1 += step
        p.w2 += step * ctx.hidden
        p.b2 += step
        logger.debug("network update: target=%s error=%.4f", target, error)
        return True

    def is_correct(self, prediction: Prediction, actual: float) -> bool:
        return prediction.decision == (actual > self.threshold)

    def reset(self) -> None:
        self.params = NeuralParams()

    def get_parameters(self) -> Optional[dict]:
        return self.params.model_dump()

    def set_parameters(self, params: Optional[dict]) -> None:
        if params is None:
            self.reset()
            return
        try:
            self.params = NeuralParams.model_validate(params)
        except ValidationError as exc:
            raise StateDecodeError(f"invalid network parameters: {exc}") from exc
