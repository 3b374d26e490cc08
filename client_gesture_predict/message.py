"""
Message Schema for prediction requests and responses.

Defines the JSON body posted to the classifier and parses its answer
against the closed set of directional labels.
"""

import json
import logging
from dataclasses import dataclass, asdict
from typing import Any, List, Optional, Sequence

from .landmarks import FLAT_LENGTH, flatten_landmarks

logger = logging.getLogger(__name__)

VALID_LABELS = ("up", "down", "left", "right")

# Failure reasons
INVALID_SHAPE = "invalid_shape"
NETWORK_FAILURE = "network_failure"
NON_SUCCESS_STATUS = "non_success_status"
UNPARSABLE_RESPONSE = "unparsable_response"
UNRECOGNIZED_LABEL = "unrecognized_label"
UNEXPECTED_ERROR = "unexpected_error"

FAILURE_REASONS = (
    INVALID_SHAPE,
    NETWORK_FAILURE,
    NON_SUCCESS_STATUS,
    UNPARSABLE_RESPONSE,
    UNRECOGNIZED_LABEL,
    UNEXPECTED_ERROR,
)


@dataclass
class PredictionRequest:
    """
    Request body sent to the classifier.

    Attributes:
        landmarks: Flattened coordinates, x/y/z per point in landmark order
    """
    landmarks: List[float]

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        """
        Serialize to JSON string.

        Raises:
            ValueError: If a coordinate is NaN or infinite
        """
        return json.dumps(self.to_dict(), allow_nan=False)

    @classmethod
    def from_points(cls, points: Sequence[Any]) -> 'PredictionRequest':
        """Flatten a point sequence into a request."""
        flat = flatten_landmarks(points)
        if len(flat) != FLAT_LENGTH:
            logger.debug(f"Request carries {len(flat)} values, expected {FLAT_LENGTH}")
        return cls(landmarks=flat)


@dataclass
class PredictionResponse:
    """Parsed classifier response."""
    prediction: Any = None

    @property
    def label(self) -> Optional[str]:
        """Validated lowercase label, or None."""
        return match_label(self.prediction)

    @classmethod
    def from_payload(cls, payload: Any) -> 'PredictionResponse':
        """
        Build from an already decoded JSON value.

        Raises:
            ValueError: If the payload is not a JSON object
        """
        if not isinstance(payload, dict):
            raise ValueError(f"Expected JSON object, got {type(payload).__name__}")
        return cls(prediction=payload.get("prediction"))

    @classmethod
    def from_json(cls, data: str) -> 'PredictionResponse':
        """Deserialize from JSON string."""
        return cls.from_payload(json.loads(data))


def match_label(value: Any) -> Optional[str]:
    """
    Match a raw prediction against the allow-list, ignoring case.

    Returns the lowercase label, or None for anything else.
    """
    if not isinstance(value, str) or not value:
        return None
    label = value.lower()
    return label if label in VALID_LABELS else None
