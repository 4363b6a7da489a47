"""
Generic result container for all pysimstudy computations.

The Result class provides a standardized envelope that bootstrap and
Monte Carlo results share. This enables shared tooling for timing,
warnings and reproducibility while allowing each stage to define its own
parameter structure.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (seed, scheme, exclusions)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for simulation computations.

    Type Parameters:
        P: The stage-specific parameter payload type

    Attributes:
        params: Stage-specific payload (bootstrap distribution, decision table)
        info: Structured metadata (sample size, seed, scheme, ...)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=BootstrapDistribution(...),
        ...     info={'n': 20, 'scheme': 'ordinary'},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='cpu_bootstrap'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
