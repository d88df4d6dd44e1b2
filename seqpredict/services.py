"""
PredictionSession: the single owner of one user's sequence, model and outcomes.

Every mutation (ingest, outcome confirmation, reset, restore) goes through the
session, so parameters are never touched by two learning steps at once and the
next prediction is always generated from the state the last step left behind.
"""
from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
import logging
from typing import Iterable, List, Optional

from seqpredict.analytics.stats import RollingOutcomes
from seqpredict.config import Settings, settings
from seqpredict.core.validation import ValidationResult, parse_values, validate_value
from seqpredict.errors import ErrorKind, StateDecodeError
from seqpredict.models.base import Prediction, Predictor
from seqpredict.models.categorical import CategoricalPredictor
from seqpredict.models.logistic import LogisticPredictor
from seqpredict.models.neural import NeuralPredictor
from seqpredict.schemas import PredictOut, SessionState, StatsOut
from seqpredict.storage import JsonStateStore
from seqpredict.utils.logging import configure_logging

logger = logging.getLogger(__name__)

VARIANTS = ("categorical", "logistic", "neural")


def build_predictor(variant: str, cfg: Settings = settings) -> Predictor:
    if variant == "categorical":
        return CategoricalPredictor()
    if variant == "logistic":
        return LogisticPredictor(cfg.learning_rate, cfg.spike_threshold)
    if variant == "neural":
        return NeuralPredictor(cfg.learning_rate, cfg.spike_threshold)
    raise ValueError(f"unknown variant {variant!r}, expected one of {VARIANTS}")


@dataclass
class IngestResult:
    accepted: List[float]
    rejected: List[ValidationResult] = field(default_factory=list)
    prediction: Optional[Prediction] = None
    message: Optional[str] = None

    def out(self) -> Optional[PredictOut]:
        return self.prediction.to_out() if self.prediction else None


@dataclass
class FeedbackResult:
    valid: bool
    correct: Optional[bool] = None
    learned: bool = False
    prediction: Optional[Prediction] = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None

    def out(self) -> Optional[PredictOut]:
        return self.prediction.to_out() if self.prediction else None


class PredictionSession:
    def __init__(self, variant: str | None = None, cfg: Settings = settings,
                 store: Optional[JsonStateStore] = None):
        self.cfg = cfg
        self.variant = variant or cfg.variant
        self.store = store if store is not None else JsonStateStore(cfg.state_path)
        self.model = build_predictor(self.variant, cfg)
        self.sequence: deque[float] = deque(maxlen=cfg.history_cap)
        self.outcomes = RollingOutcomes(cfg.outcome_window)
        self.current: Optional[Prediction] = None

    # ---------------- input ----------------
    def validate(self, x) -> ValidationResult:
        return validate_value(x, bounded=self.model.bounded)

    def add_values(self, raw: str | Iterable) -> IngestResult:
        """Append every valid token and regenerate the prediction."""
        accepted, rejected = parse_values(raw, bounded=self.model.bounded)
        for r in rejected:
            logger.debug("dropped token %r (%s)", r.raw, r.error)
        if not accepted:
            return IngestResult([], rejected, self.current, "Please enter at least one valid number")
        self.sequence.extend(accepted)
        self.current = self.model.predict(list(self.sequence))
        return IngestResult(accepted, rejected, self.current)

    def predict(self) -> Prediction:
        if self.current is None:
            self.current = self.model.predict(list(self.sequence))
        return self.current

    # ---------------- feedback ----------------
    def confirm(self, actual) -> FeedbackResult:
        """Record the realized value for the outstanding prediction and learn from it once."""
        res = self.validate(actual)
        if not res.valid:
            return FeedbackResult(False, error=res.error, message=res.message)
        pred = self.current
        if pred is None:
            return FeedbackResult(False, error=ErrorKind.MISSING_LEARNING_CONTEXT,
                                  message="No prediction to confirm")
        value = res.value
        ok = self.model.is_correct(pred, value)
        self.outcomes.record(ok)
        self.sequence.append(value)
        learned = self.model.learn(value, pred, list(self.sequence))
        self.current = self.model.predict(list(self.sequence))
        return FeedbackResult(True, correct=ok, learned=learned, prediction=self.current)

    def reset(self) -> None:
        """Back to defaults in memory and on disk."""
        self.store.clear()
        self.sequence.clear()
        self.model.reset()
        self.outcomes.reset()
        self.current = None
        logger.info("session reset (%s)", self.variant)

    # ---------------- diagnostics ----------------
    def stats(self) -> StatsOut:
        out = StatsOut(
            variant=self.variant,
            sequence_length=len(self.sequence),
            correct=self.outcomes.correct,
            total=self.outcomes.total,
            accuracy=self.outcomes.accuracy(),
            recent_accuracy=self.outcomes.recent_accuracy(),
        )
        if self.current is not None:
            out.last_decision = self.current.decision
            out.last_confidence = self.current.confidence
        if isinstance(self.model, CategoricalPredictor):
            mk = self.model.tracker.stats()
            out.transitions = self.model.transitions()
            out.transition_probs = mk.transition
            out.category_counts = mk.category_counts
            out.entropy = mk.entropy
        return out

    # ---------------- persistence ----------------
    def snapshot(self) -> SessionState:
        return SessionState(
            variant=self.variant,
            sequence=list(self.sequence),
            parameters=self.model.get_parameters(),
            transitions=self.model.transitions(),
            outcomes=list(self.outcomes.flags),
            correct=self.outcomes.correct,
            total=self.outcomes.total,
        )

    def restore(self, state: SessionState | dict) -> None:
        """Replace the whole session state. Raises StateDecodeError and leaves the session untouched."""
        if not isinstance(state, SessionState):
            try:
                state = SessionState.model_validate(state)
            except ValueError as exc:
                raise StateDecodeError(f"invalid session state: {exc}") from exc
        if state.variant != self.variant:
            raise StateDecodeError(f"state is for {state.variant!r}, session runs {self.variant!r}")
        for x in state.sequence:
            if not self.validate(x).valid:
                raise StateDecodeError(f"invalid value {x!r} in persisted sequence")

        model = build_predictor(self.variant, self.cfg)
        model.set_parameters(state.parameters)
        seq = deque(state.sequence, maxlen=self.cfg.history_cap)
        model.load_transitions(state.transitions, seq)

        self.model = model
        self.sequence = seq
        self.outcomes.load(state.outcomes, state.correct, state.total)
        self.current = None

    def save(self, store: Optional[JsonStateStore] = None) -> None:
        (store or self.store).save(self.snapshot())

    def load(self, store: Optional[JsonStateStore] = None) -> bool:
        state = (store or self.store).load()
        if state is None:
            return False
        self.restore(state)
        return True


def open_session(cfg: Settings = settings) -> PredictionSession:
    """Host startup: logging, then the persisted session or a fresh one."""
    configure_logging(cfg)
    session = PredictionSession(cfg=cfg)
    try:
        if session.load():
            logger.info("restored %s session with %d values", session.variant, len(session.sequence))
    except StateDecodeError:
        logger.exception("discarding unreadable state at %s", cfg.state_path)
        session.reset()
    return session
