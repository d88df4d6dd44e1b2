from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

# Parameters are mutated in place by the learners; pydantic does not
# re-validate on attribute assignment. NaN and infinity are rejected on load.

HIDDEN_SIZE = 8


class LogisticParams(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    intercept: float = -3.5
    mean_weight: float = 0.4
    std_weight: float = 1.1
    slope_weight: float = 0.8


class NeuralParams(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    w1: list[float] = Field(default_factory=lambda: [0.2, 0.5, 0.8, -0.4, 0.6, 0.3, -0.2, 0.5])
    b1: float = 0.1
    w2: float = 2.4
    b2: float = -3.0

    @field_validator("w1")
    @classmethod
    def _w1_size(cls, v: list[float]) -> list[float]:
        if len(v) != HIDDEN_SIZE:
            raise ValueError(f"w1 must have {HIDDEN_SIZE} weights, got {len(v)}")
        return v


class PredictOut(BaseModel):
    decision: str | bool
    probability: Optional[float] = None
    confidence: float
    certainty: Optional[str] = None
    explanation: Optional[str] = None
    rough_value: Optional[float] = None
    error: Optional[str] = None


class StatsOut(BaseModel):
    variant: str
    sequence_length: int
    category_counts: dict[str, int] = Field(default_factory=dict)
    transitions: dict[str, int] = Field(default_factory=dict)
    transition_probs: list[list[float]] = Field(default_factory=list)
    entropy: float = 0.0
    correct: int = 0
    total: int = 0
    accuracy: float = 0.0
    recent_accuracy: float = 0.0
    last_decision: str | bool | None = None
    last_confidence: float = 0.0


class SessionState(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    variant: str
    sequence: list[float] = Field(default_factory=list)
    parameters: Optional[dict] = None
    transitions: dict[str, int] = Field(default_factory=dict)
    outcomes: list[bool] = Field(default_factory=list)
    correct: int = 0
    total: int = 0
