"""Bootstrap backends."""

from pysimstudy.bootstrap.backends.cpu import CPUBootstrapBackend

__all__ = ["CPUBootstrapBackend"]
