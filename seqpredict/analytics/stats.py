from collections import deque
from typing import Iterable


class RollingOutcomes:
    """Correctness flags of confirmed predictions, trailing window plus lifetime counters."""

    def __init__(self, window: int = 20):
        self.flags: deque[bool] = deque(maxlen=window)
        self.correct = 0
        self.total = 0

    def reset(self):
        self.flags.clear()
        self.correct = 0
        self.total = 0

    def record(self, ok: bool):
        self.flags.append(bool(ok))
        self.total += 1
        if ok:
            self.correct += 1

    def load(self, flags: Iterable[bool], correct: int = 0, total: int = 0):
        self.flags.clear()
        self.flags.extend(bool(f) for f in flags)
        self.correct = correct
        self.total = total

    def accuracy(self) -> float:
        return (self.correct / self.total * 100) if self.total else 0.0

    def recent_accuracy(self) -> float:
        n = len(self.flags)
        return (sum(self.flags) / n * 100) if n else 0.0
