"""
Normalization strategies.

Each strategy is a pure transform from validated landmarks to the points
that get flattened and sent. The prediction client tries an ordered list
of strategies and stops at the first one the classifier answers with a
known label.
"""

from typing import Dict, Iterable, List, Sequence, Type, Union

from .landmarks import Point3D, normalize_landmarks, wrist_relative_landmarks


class NormalizationStrategy:
    """Base class for landmark transforms."""

    name = "base"

    def apply(self, points: Sequence[Point3D]) -> List[Point3D]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ScaledWristStrategy(NormalizationStrategy):
    """Wrist-relative and scaled by hand size. The default contract."""

    name = "scaled"

    def apply(self, points: Sequence[Point3D]) -> List[Point3D]:
        return list(normalize_landmarks(points))


class WristRelativeStrategy(NormalizationStrategy):
    """Wrist-relative, unscaled."""

    name = "wrist_relative"

    def apply(self, points: Sequence[Point3D]) -> List[Point3D]:
        return wrist_relative_landmarks(points)


class AbsoluteStrategy(NormalizationStrategy):
    """Raw detector coordinates."""

    name = "absolute"

    def apply(self, points: Sequence[Point3D]) -> List[Point3D]:
        return list(points)


STRATEGIES: Dict[str, Type[NormalizationStrategy]] = {
    cls.name: cls
    for cls in (ScaledWristStrategy, WristRelativeStrategy, AbsoluteStrategy)
}

DEFAULT_STRATEGY = ScaledWristStrategy.name


def get_strategy(name: str) -> NormalizationStrategy:
    """
    Look up a strategy by name.

    Raises:
        ValueError: If the name is not registered
    """
    key = name.strip().lower()
    try:
        return STRATEGIES[key]()
    except KeyError:
        known = ", ".join(sorted(STRATEGIES))
        raise ValueError(f"Unknown normalization strategy '{name}' (known: {known})") from None


def resolve_strategies(
    specs: Union[None, str, Iterable[Union[str, NormalizationStrategy]]],
) -> List[NormalizationStrategy]:
    """
    Build an ordered strategy list.

    Accepts None (default strategy only), a comma separated string, or an
    iterable mixing names and strategy instances.
    """
    if specs is None:
        return [get_strategy(DEFAULT_STRATEGY)]
    if isinstance(specs, str):
        specs = [s for s in specs.split(",") if s.strip()]

    resolved: List[NormalizationStrategy] = []
    for spec in specs:
        if isinstance(spec, NormalizationStrategy):
            resolved.append(spec)
        else:
            resolved.append(get_strategy(spec))

    if not resolved:
        raise ValueError("At least one normalization strategy is required")
    return resolved
