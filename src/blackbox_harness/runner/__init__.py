"""
Module: runner

Purpose:
    Suite execution, threshold evaluation and summary reporting.
"""

from .suite import BlackBoxSuite, RunState
from .report import SuiteReport, build_report, log_report
from .thresholds import evaluate

__all__ = [
    "BlackBoxSuite",
    "RunState",
    "SuiteReport",
    "build_report",
    "log_report",
    "evaluate",
]
