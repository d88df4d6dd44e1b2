from __future__ import annotations
from collections import Counter
import logging
from typing import Sequence

from seqpredict.analytics.markov import TransitionTracker
from seqpredict.core.categories import categorize, label_of, midpoint_of
from seqpredict.core.features import STAT_WINDOW, lag_states, weighted_mean
from seqpredict.models.base import (
    Prediction,
    Predictor,
    certainty_label,
    confidence_from_lags,
    neutral,
)

logger = logging.getLogger(__name__)

VALUE_DECAY = 0.8


def mode_of(lags: Sequence[int]) -> int:
    """Most frequent state; ties go to the tied state seen most recently."""
    counts = Counter(lags)
    best = max(counts.values())
    for s in reversed(lags):
        if counts[s] == best:
            return s
    return 0


def rough_value(values: Sequence[float], state: int) -> float:
    same = [x for x in list(values)[-STAT_WINDOW:] if categorize(x) == state]
    if not same:
        return midpoint_of(state)
    return round(weighted_mean(same, VALUE_DECAY), 2)


class CategoricalPredictor(Predictor):
    """Low/Mid/High vote over the last 5 states. Learning = transition recount."""

    name = "categorical"
    bounded = True

    def __init__(self):
        self.tracker = TransitionTracker()

    def predict(self, values: Sequence[float]) -> Prediction:
        if not values:
            return neutral(label_of(0), "No data available for prediction.")
        lags = lag_states(values)
        mode = mode_of(lags)
        conf = confidence_from_lags(lags)
        est = rough_value(values, mode)
        path = " ".join(label_of(s) for s in lags)
        return Prediction(
            decision=label_of(mode),
            confidence=conf,
            certainty=certainty_label(conf),
            explanation=f"Last {len(lags)} states: {path}. Most common: {label_of(mode)} (~{est:.2f}).",
            rough_value=est,
        )

    def learn(self, actual: float, prediction: Prediction, history: Sequence[float]) -> bool:
        self.tracker.build_from(history)
        logger.debug("transition counts rebuilt from %d values", len(history))
        return True

    def is_correct(self, prediction: Prediction, actual: float) -> bool:
        return prediction.decision == label_of(categorize(actual))

    def reset(self) -> None:
        self.tracker.reset()

    def transitions(self) -> dict:
        return dict(self.tracker.C)

    def load_transitions(self, counts: dict, values: Sequence[float] = ()) -> None:
        self.tracker.load(counts, values)
