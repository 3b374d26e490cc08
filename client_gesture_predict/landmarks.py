"""
Landmark Normalization - Hand skeleton geometry for the prediction client.

This module turns a raw 21-point hand skeleton into the wrist-centred,
scale-free representation the remote classifier expects, and validates
landmark sets before anything is sent over the network.
"""

import copy
import math
import logging
from dataclasses import dataclass
from numbers import Real
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

# ============================================================================
# MediaPipe Landmark Indices
# ============================================================================

NUM_LANDMARKS = 21
WRIST = 0
MIDDLE_MCP = 9  # mid-finger scale reference

FLAT_LENGTH = NUM_LANDMARKS * 3


@dataclass(frozen=True)
class Point3D:
    """A single landmark position."""
    x: float
    y: float
    z: float

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


# ============================================================================
# Vector/Geometry Helpers
# ============================================================================

def _xyz(p) -> Tuple[Any, Any, Any]:
    """Coordinates of any accepted point form."""
    pt = to_point(p)
    if pt is None:
        raise ValueError(f"Not a landmark: {p!r}")
    return pt.as_tuple()


def _v(p) -> np.ndarray:
    """Get 3D vector from landmark."""
    return np.array(_xyz(p), dtype=np.float64)


def _as_array(points: Sequence[Any]) -> np.ndarray:
    """Stack landmarks into an (N, 3) array."""
    return np.array([_xyz(p) for p in points], dtype=np.float64)


def distance_3d(a, b) -> float:
    """Euclidean distance between two landmarks."""
    return float(np.linalg.norm(_v(a) - _v(b)))


def _points_from_array(arr: np.ndarray) -> List[Point3D]:
    return [Point3D(float(x), float(y), float(z)) for x, y, z in arr]


# ============================================================================
# Normalization
# ============================================================================

def _scale_of(arr: np.ndarray) -> float:
    dists = np.linalg.norm(arr - arr[WRIST], axis=1)
    # np.max so a NaN distance propagates into the scale
    return float(np.max([dists[MIDDLE_MCP], dists.max()]))


def landmark_scale(landmarks: Sequence[Any]) -> float:
    """
    Scale factor used to make a hand skeleton size independent.

    The larger of the wrist to mid-finger distance and the largest wrist to
    landmark distance.
    """
    return _scale_of(_as_array(landmarks))


def normalize_landmarks(landmarks):
    """
    Normalize a hand skeleton relative to the wrist.

    Each point becomes (point - wrist) / scale. Inputs that are not exactly
    21 points long, or whose points cannot be read as x/y/z numbers, are
    returned unchanged. When the scale is zero or not finite a shallow copy
    of the input is returned instead.

    Args:
        landmarks: Sequence of 21 points (attributes, "x"/"y"/"z" mappings
            or 3-element sequences)

    Returns:
        List of normalized Point3D, or the input as described above
    """
    if not landmarks or len(landmarks) != NUM_LANDMARKS:
        return landmarks

    try:
        arr = _as_array(landmarks)
    except (ValueError, TypeError, OverflowError) as e:
        logger.debug(f"Unreadable landmarks, passing through: {e}")
        return landmarks

    scale = _scale_of(arr)

    if scale == 0 or not math.isfinite(scale):
        logger.debug(f"Degenerate landmark scale {scale}, passing points through")
        return [copy.copy(p) for p in landmarks]

    return _points_from_array((arr - arr[WRIST]) / scale)


def wrist_relative_landmarks(landmarks) -> List[Point3D]:
    """Translate landmarks so the wrist sits at the origin, without scaling."""
    arr = _as_array(landmarks)
    return _points_from_array(arr - arr[WRIST])


def flatten_landmarks(points: Sequence[Any]) -> List[float]:
    """Flatten landmarks into [x0, y0, z0, x1, y1, z1, ...]."""
    flat: List[float] = []
    for p in points:
        flat.extend(float(c) for c in _xyz(p))
    return flat


# ============================================================================
# Input Coercion / Validation
# ============================================================================

def _is_number(v: Any) -> bool:
    return isinstance(v, Real) and not isinstance(v, bool)


def to_point(obj: Any) -> Optional[Point3D]:
    """
    Coerce a landmark-like object into a Point3D.

    Accepts objects with x/y/z attributes (MediaPipe landmarks), mappings
    with "x"/"y"/"z" keys and 3-element sequences. Returns None when the
    object has no recognizable shape. Coordinates are not type checked here.
    """
    if isinstance(obj, Point3D):
        return obj
    if isinstance(obj, dict):
        if not all(k in obj for k in ("x", "y", "z")):
            return None
        return Point3D(obj["x"], obj["y"], obj["z"])
    if all(hasattr(obj, a) for a in ("x", "y", "z")):
        return Point3D(obj.x, obj.y, obj.z)
    if isinstance(obj, (list, tuple)) and len(obj) == 3:
        return Point3D(obj[0], obj[1], obj[2])
    return None


def check_landmarks(landmarks) -> Tuple[bool, str, Optional[List[Point3D]]]:
    """
    Validate and coerce a landmark set.

    Ensures:
    - The set exists and holds exactly 21 points
    - Every point has x, y and z
    - Every coordinate is a real number (bool excluded) and finite

    Args:
        landmarks: Candidate landmark set

    Returns:
        Tuple of (is_valid, reason_string, points or None)
    """
    if landmarks is None:
        return _reject("none")

    try:
        count = len(landmarks)
    except TypeError:
        return _reject("not_a_sequence")

    if count != NUM_LANDMARKS:
        return _reject("wrong_length", f"got {count} points")

    points: List[Point3D] = []
    for i, raw in enumerate(landmarks):
        p = to_point(raw)
        if p is None:
            return _reject("bad_point", f"index {i}")
        if not all(_is_number(c) for c in p.as_tuple()):
            return _reject("coordinate_not_numeric", f"index {i}")
        try:
            finite = all(math.isfinite(c) for c in p.as_tuple())
        except OverflowError:
            # ints beyond float range
            finite = False
        if not finite:
            return _reject("coordinate_not_finite", f"index {i}")
        points.append(Point3D(float(p.x), float(p.y), float(p.z)))

    return True, "ok", points


def _reject(reason: str, detail: str = "") -> Tuple[bool, str, None]:
    if detail:
        logger.warning(f"Invalid landmarks: {reason} ({detail})")
    else:
        logger.warning(f"Invalid landmarks: {reason}")
    return False, reason, None
