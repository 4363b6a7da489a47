"""
pysimstudy Monte Carlo simulation.

Outer replication loop: generate a sample, test under the null with
exact, asymptotic and bootstrap critical values, and aggregate the
decisions into empirical rejection rates.

Usage:
    from pysimstudy.montecarlo import SimulationConfig, simulate

    cfg = SimulationConfig.for_simulation(
        20, MeanSampleGenerator(Normal()), MeanTStatistic(),
        significance_level=0.05, monte_carlo_reps=2000,
        bootstrap_reps=199, seed=111,
    )
    sol = simulate(cfg)
    sol.rejection_rates   # {'exact': ..., 'asymptotic': ..., 'bootstrap': ...}
"""

from pysimstudy.montecarlo._common import MonteCarloParams
from pysimstudy.montecarlo.design import SimulationConfig
from pysimstudy.montecarlo.rules import DecisionRule
from pysimstudy.montecarlo.solution import MonteCarloSolution
from pysimstudy.montecarlo.solvers import combine, simulate

__all__ = [
    "simulate",
    "combine",
    "SimulationConfig",
    "DecisionRule",
    "MonteCarloParams",
    "MonteCarloSolution",
]
