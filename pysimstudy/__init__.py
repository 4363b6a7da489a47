"""
pysimstudy: Monte Carlo studies of bootstrap hypothesis tests.

Compares the empirical size of exact, asymptotic and bootstrap-t
decision rules across data generating processes.

Submodules:
    distributions: Error and regressor distribution families
    dgp: Sample generators and test statistics
    bootstrap: Resampling and bootstrap distributions
    montecarlo: Outer replication loop and rejection rates
    experiment: Configuration sweeps and reports
"""

__version__ = "0.1.0"

from pysimstudy import distributions
from pysimstudy import dgp
from pysimstudy import bootstrap
from pysimstudy import montecarlo
from pysimstudy import experiment

__all__ = [
    "__version__",
    "distributions",
    "dgp",
    "bootstrap",
    "montecarlo",
    "experiment",
]
