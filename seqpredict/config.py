from pydantic_settings import BaseSettings
from typing import Literal
import os

class Settings(BaseSettings):
    variant: Literal["categorical", "logistic", "neural"] = os.getenv("VARIANT", "neural")
    history_cap: int = int(os.getenv("HISTORY_CAP", 200))
    outcome_window: int = int(os.getenv("OUTCOME_WINDOW", 20))
    learning_rate: float = float(os.getenv("LEARNING_RATE", 0.01))
    spike_threshold: float = float(os.getenv("SPIKE_THRESHOLD", 7.0))
    state_path: str = os.getenv("STATE_PATH", "./data/seqpredict_state.json")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_json: bool = os.getenv("LOG_JSON", "0") in ("1", "true", "True")
    log_file: str | None = os.getenv("LOG_FILE")

settings = Settings()
