"""
Client Gesture Predict - Thin client for a remote hand-gesture classifier.

This module normalizes a 21-point hand skeleton (as produced by MediaPipe
Hands or any compatible detector), posts it to a gesture-classification
HTTP endpoint and returns one of the directional labels
"up", "down", "left" or "right", or None when nothing was recognized.

NO CAMERA OR DETECTION CODE.
"""

__version__ = "1.0.0"

from .landmarks import Point3D, normalize_landmarks, flatten_landmarks
from .message import VALID_LABELS
from .predictor import PredictionClient, SyncPredictionClient, get_predicted_label

__all__ = [
    "Point3D",
    "normalize_landmarks",
    "flatten_landmarks",
    "VALID_LABELS",
    "PredictionClient",
    "SyncPredictionClient",
    "get_predicted_label",
]
