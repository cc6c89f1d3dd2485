"""Service modules"""
from .recorder import HealthFactorRecorder

__all__ = ["HealthFactorRecorder"]
