from __future__ import annotations
from dataclasses import dataclass
import math
from typing import List, Sequence

import numpy as np

from seqpredict.core.categories import categorize

STAT_WINDOW = 10
LAG_WINDOW = 5

# Trailing-window features. Recency weights are decay^(distance from the most
# recent value), so the newest sample always weighs 1.


@dataclass(frozen=True)
class WindowStats:
    n: int = 0
    mean: float = 0.0
    std: float = 0.0
    slope: float = 0.0
    last: float = 0.0


def decay_weights(n: int, decay: float) -> np.ndarray:
    return decay ** np.arange(n - 1, -1, -1, dtype=float)


def weighted_mean(values: Sequence[float], decay: float) -> float:
    x = np.asarray(values, dtype=float)
    return float(np.average(x, weights=decay_weights(len(x), decay)))


def window_stats(values: Sequence[float], decay: float, window: int = STAT_WINDOW) -> WindowStats:
    recent = np.asarray(list(values)[-window:], dtype=float)
    n = len(recent)
    if n == 0:
        return WindowStats()
    w = decay_weights(n, decay)
    # huge finite inputs may overflow to inf/nan; callers check finiteness
    with np.errstate(over="ignore", invalid="ignore"):
        mean = float(np.average(recent, weights=w))
        var = float(np.average((recent - mean) ** 2, weights=w))
    return WindowStats(
        n=n,
        mean=mean,
        std=math.sqrt(var) if var >= 0 else math.nan,
        slope=float(recent[-1] - recent[0]),
        last=float(recent[-1]),
    )


def logistic_features(st: WindowStats) -> List[float]:
    return [st.mean, st.std, st.slope]


def network_features(st: WindowStats) -> List[float]:
    """[bias, mean, std, slope, last, signed log(last), mean*std, slope^2]"""
    log_last = math.copysign(math.log1p(abs(st.last)), st.last) if st.last else 0.0
    return [1.0, st.mean, st.std, st.slope, st.last, log_last, st.mean * st.std, st.slope * st.slope]


def lag_states(values: Sequence[float], k: int = LAG_WINDOW) -> List[int]:
    return [categorize(x) for x in list(values)[-k:]]
