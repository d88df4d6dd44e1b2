import pytest

from seqpredict.errors import ErrorKind, StateDecodeError
from seqpredict.models.base import Prediction, confidence_from_probability
from seqpredict.models.logistic import LogisticPredictor
from seqpredict.schemas import LogisticParams

DEFAULTS = {"intercept": -3.5, "mean_weight": 0.4, "std_weight": 1.1, "slope_weight": 0.8}


def test_reference_score():
    m = LogisticPredictor()
    z, p = m.score(5.43, 1.47, 2.7)
    assert z == pytest.approx(2.449, abs=1e-3)
    assert p == pytest.approx(0.920, abs=1e-3)
    assert p > 0.5
    assert confidence_from_probability(p) == pytest.approx(84, abs=0.5)


def test_needs_two_values():
    p = LogisticPredictor().predict([9.0])
    assert p.probability == 0.5 and p.decision is False and p.confidence == 0
    assert p.error == ErrorKind.INSUFFICIENT_DATA
    assert p.context is None


def test_prediction_keeps_features():
    m = LogisticPredictor()
    p = m.predict([5.0, 6.0, 8.0])
    assert len(p.context.features) == 3
    assert p.context.probability == p.probability
    assert p.decision == (p.probability > 0.5)


def test_gradient_step():
    m = LogisticPredictor(learning_rate=0.01)
    pred = m.predict([5.0, 6.0, 8.0])
    mean, std, slope = pred.context.features
    err = 1.0 - pred.probability
    assert m.learn(9.0, pred, [5.0, 6.0, 8.0, 9.0])
    assert m.params.intercept == pytest.approx(-3.5 + 0.01 * err)
    assert m.params.mean_weight == pytest.approx(0.4 + 0.01 * err * mean)
    assert m.params.std_weight == pytest.approx(1.1 + 0.01 * err * std)
    assert m.params.slope_weight == pytest.approx(0.8 + 0.01 * err * slope)


# Learning is not deduplicated by value: two predictions with identical
# content each move the weights. Feeding the *same* Prediction object twice
# applies only once, because its context is consumed (next test).
def test_every_prediction_updates_without_dedup():
    m = LogisticPredictor()
    seq = [5.0, 6.0, 8.0]
    first, second = m.predict(seq), m.predict(seq)
    m.learn(2.0, first, seq)
    once = m.params.intercept
    m.learn(2.0, second, seq)
    assert m.params.intercept < once < -3.5


def test_reused_prediction_is_skipped(caplog):
    m = LogisticPredictor()
    pred = m.predict([5.0, 6.0, 8.0])
    m.learn(9.0, pred, [])
    before = m.params.model_dump()
    assert m.learn(9.0, pred, []) is False
    assert m.params.model_dump() == before
    assert "no learning context" in caplog.text


def test_missing_context_is_skipped():
    m = LogisticPredictor()
    assert m.learn(9.0, Prediction(decision=True, confidence=50, probability=0.75), []) is False
    assert m.get_parameters() == DEFAULTS


def test_reset_and_parameters():
    m = LogisticPredictor()
    for _ in range(5):
        m.learn(9.0, m.predict([5.0, 6.0, 8.0]), [])
    assert m.get_parameters() != DEFAULTS
    m.reset()
    assert m.get_parameters() == DEFAULTS == LogisticParams().model_dump()


def test_bad_parameters_raise():
    with pytest.raises(StateDecodeError):
        LogisticPredictor().set_parameters({"intercept": "abc"})


def test_non_finite_parameters_raise():
    m = LogisticPredictor()
    for bad in (float("nan"), float("inf")):
        with pytest.raises(StateDecodeError):
            m.set_parameters({**DEFAULTS, "intercept": bad})
    assert m.get_parameters() == DEFAULTS
