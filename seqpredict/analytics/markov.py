from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Iterable

from seqpredict.core.categories import LABELS, categorize

STATES = tuple(range(len(LABELS)))


@dataclass
class MarkovStats:
    transition: list[list[float]]
    counts: list[list[int]]
    category_counts: dict[str, int]
    entropy: float


def transition_key(a: int, b: int) -> str:
    return f"{a}->{b}"


class TransitionTracker:
    """Counts of adjacent state->state transitions over the capped sequence."""

    def __init__(self):
        self.C: dict[str, int] = {}
        self.states: list[int] = []

    def reset(self):
        self.C = {}
        self.states = []

    def push(self, state: int):
        if self.states:
            k = transition_key(self.states[-1], state)
            self.C[k] = self.C.get(k, 0) + 1
        self.states.append(state)

    def build_from(self, values: Iterable[float]):
        self.reset()
        for x in values:
            self.push(categorize(x))

    def load(self, counts: dict[str, int], values: Iterable[float] = ()):
        """Restore persisted counts verbatim; ``values`` only feeds the marginal."""
        self.C = {str(k): int(v) for k, v in counts.items()}
        self.states = [categorize(x) for x in values]

    def count(self, a: int, b: int) -> int:
        return self.C.get(transition_key(a, b), 0)

    def stats(self) -> MarkovStats:
        counts = [[self.count(a, b) for b in STATES] for a in STATES]
        transition = []
        for row in counts:
            n = sum(row)
            transition.append([(c / n) if n else 0.0 for c in row])
        # entropy of the state marginal over the tracked sequence
        marg = {LABELS[s]: self.states.count(s) for s in STATES}
        total = len(self.states)
        H = 0.0
        for c in marg.values():
            if c == 0:
                continue
            p = c / total
            H -= p * math.log(p, 2)
        return MarkovStats(transition=transition, counts=counts, category_counts=marg, entropy=H)
