"""Default options for trajectory analysis and plotting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

DEFAULT_TOLERANCE = 1e-9
DEFAULT_MAX_DERIVATIVE = 2
DEFAULT_SAMPLES = 200


@dataclass(frozen=True)
class AnalysisOptions:
    """Immutable analysis settings.

    Attributes
    ----------
    tolerance : float
        Jumps with a magnitude at or below this value count as continuous.
    max_derivative : int
        Highest derivative order inspected by continuity checks.
    samples : int
        Number of sample points used when plotting.
    """

    tolerance: float = DEFAULT_TOLERANCE
    max_derivative: int = DEFAULT_MAX_DERIVATIVE
    samples: int = DEFAULT_SAMPLES

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]] = None) -> "AnalysisOptions":
        """Coerce a raw mapping (e.g. a parsed ``[analysis]`` table).

        Unknown keys are ignored; values that cannot be converted or are
        negative fall back to the defaults.
        """
        config = config or {}

        def _coerce(key: str, kind: type, fallback: Any) -> Any:
            try:
                value = kind(config.get(key, fallback))
            except (TypeError, ValueError):
                return fallback
            return value if value >= 0 else fallback

        return cls(
            tolerance=_coerce("tolerance", float, DEFAULT_TOLERANCE),
            max_derivative=_coerce("max_derivative", int, DEFAULT_MAX_DERIVATIVE),
            samples=max(2, _coerce("samples", int, DEFAULT_SAMPLES)),
        )


DEFAULT_OPTIONS = AnalysisOptions()
