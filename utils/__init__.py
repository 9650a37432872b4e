"""
Utilities module for the Security Alert Classifier.
"""
from .logger import logger, init_logging, setup_logging, is_degraded

__all__ = ["logger", "init_logging", "setup_logging", "is_degraded"]
