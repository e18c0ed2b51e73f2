"""
Logging and metrics for the cleaning pipelines.
"""

from .logger import get_logger, log_operation, log_rule_result, setup_logger
from .metrics import MetricsCollector, write_metrics

__all__ = [
    "get_logger",
    "log_operation",
    "log_rule_result",
    "setup_logger",
    "MetricsCollector",
    "write_metrics",
]
