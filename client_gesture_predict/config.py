"""
Client configuration.

Environment Variables:
    GESTURE_PREDICT_URL: Classifier endpoint (default: hosted /predict endpoint)
    GESTURE_STRATEGIES: Comma separated normalization strategies tried in
        order (default: scaled)
    GESTURE_TIMEOUT_S: Request timeout in seconds (default: transport default)
"""

import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .strategies import DEFAULT_STRATEGY, resolve_strategies

DEFAULT_PREDICT_URL = "https://idmiunzktedg.us-east-1.clawcloudrun.com/predict"


@dataclass
class ClientConfig:
    """Settings for PredictionClient."""
    url: str = DEFAULT_PREDICT_URL
    strategies: Tuple[str, ...] = (DEFAULT_STRATEGY,)
    timeout: Optional[float] = None

    def __post_init__(self):
        if not self.url:
            raise ValueError("Prediction URL must not be empty")
        if self.timeout is not None and (not self.timeout > 0 or not math.isfinite(self.timeout)):
            raise ValueError(f"Timeout must be positive, got {self.timeout}")
        # Fail early on unknown names
        resolve_strategies(self.strategies)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ClientConfig':
        """Load configuration from environment variables."""
        env = os.environ if environ is None else environ

        url = env.get("GESTURE_PREDICT_URL", DEFAULT_PREDICT_URL)

        raw_strategies = env.get("GESTURE_STRATEGIES", DEFAULT_STRATEGY)
        strategies = tuple(s.strip() for s in raw_strategies.split(",") if s.strip())

        raw_timeout = env.get("GESTURE_TIMEOUT_S")
        timeout = None
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(f"GESTURE_TIMEOUT_S must be a number, got '{raw_timeout}'") from None

        return cls(url=url, strategies=strategies or (DEFAULT_STRATEGY,), timeout=timeout)
