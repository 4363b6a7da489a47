"""Monte Carlo backends."""

from pysimstudy.montecarlo.backends.cpu import CPUMonteCarloBackend

__all__ = ["CPUMonteCarloBackend"]
