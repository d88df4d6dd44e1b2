import pytest

from seqpredict.core.activations import sigmoid, tanh
from seqpredict.models.base import (
    Prediction,
    PredictionContext,
    certainty_label,
    confidence_from_lags,
    confidence_from_probability,
)


def test_lag_confidence_by_unique_count():
    assert confidence_from_lags([0, 0, 0, 1, 0]) == 80
    assert confidence_from_lags([0, 0, 0, 0, 0]) == 100
    assert confidence_from_lags([0, 1, 2]) == 60
    assert confidence_from_lags([]) == 0


def test_probability_confidence():
    assert confidence_from_probability(0.5) == 0
    assert confidence_from_probability(1.0) == 100
    assert confidence_from_probability(0.2) == pytest.approx(60)


def test_certainty_label():
    assert certainty_label(80) == "High"
    assert certainty_label(79.9) == "Medium"
    assert certainty_label(60) == "Medium"
    assert certainty_label(59.9) == "Low"


def test_activations_clamp():
    assert sigmoid(0) == 0.5
    assert sigmoid(25) == 1.0 and sigmoid(-25) == 0.0
    assert tanh(21) == 1.0 and tanh(-21) == -1.0
    assert tanh(0.5) == pytest.approx(0.462117, abs=1e-6)


def test_context_is_consumed_once():
    p = Prediction(decision=True, confidence=10, context=PredictionContext((1.0,), 0.6))
    assert p.take_context() is not None
    assert p.take_context() is None
    assert Prediction(decision=False, confidence=0).take_context() is None


def test_to_out_drops_context():
    p = Prediction(decision="Low", confidence=80, certainty="High", rough_value=1.9)
    out = p.to_out().model_dump()
    assert out["decision"] == "Low" and out["rough_value"] == 1.9
    assert "context" not in out
