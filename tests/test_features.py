import math

import pytest

from seqpredict.core.features import (
    WindowStats,
    decay_weights,
    lag_states,
    logistic_features,
    network_features,
    window_stats,
)


def test_empty_window_defaults_to_zero():
    st = window_stats([], 0.85)
    assert st == WindowStats()
    assert network_features(st) == [1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0]


def test_newest_weight_is_one():
    w = decay_weights(3, 0.5)
    assert list(w) == [0.25, 0.5, 1.0]


def test_weighted_stats():
    st = window_stats([2.0, 4.0], 0.5)
    assert st.mean == pytest.approx(10 / 3)
    assert st.std == pytest.approx(math.sqrt(8 / 9))
    assert st.slope == 2.0 and st.last == 4.0
    assert logistic_features(st) == [st.mean, st.std, st.slope]


def test_window_is_last_ten():
    st = window_stats([float(i) for i in range(1, 16)], 0.85)
    assert st.n == 10
    assert st.slope == 9.0 and st.last == 15.0


def test_network_features_layout():
    st = WindowStats(n=3, mean=4.0, std=2.0, slope=-3.0, last=-2.0)
    F = network_features(st)
    assert len(F) == 8
    assert F[0] == 1.0
    assert F[5] == pytest.approx(-math.log(3.0))
    assert F[6] == 8.0 and F[7] == 9.0


def test_lag_states():
    assert lag_states([1.0, 2.0, 3.0, 4.0, 5.0, 1.2]) == [0, 1, 2, 2, 0]
    assert lag_states([3.0]) == [1]
