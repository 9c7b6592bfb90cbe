#!/usr/bin/env python3

"""
LTdiag Performance Monitoring Utilities

This module provides lightweight timing of the stages of an LTdiag run (configuration loading, legend composition, layer classification, rendering, histogram evaluation). The PerformanceMonitor class measures named operations through a context manager, keeps the elapsed times in memory and reports them through an LTLogger when one is attached, or to stdout otherwise. Timing is recorded even when the timed operation raises, so a failing stage still shows up in the summary.

Classes:
    PerformanceMonitor: Context-manager based timer for named LTdiag operations.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

from datetime import datetime, timedelta
from typing import Dict, Optional
from contextlib import contextmanager

from .utils_logger import LTLogger


class PerformanceMonitor:
    """
    Performance monitoring utility measuring and reporting the elapsed time of named operations. Durations are stored per operation name; timing the same name twice keeps the latest measurement.
    """

    def __init__(self, logger: Optional[LTLogger] = None) -> None:
        """
        Initialize an empty monitor.

        Parameters:
            logger (Optional[LTLogger]): Logger receiving timing reports, None prints to stdout (default: None).

        Returns:
            None
        """
        self.logger = logger
        self.durations: Dict[str, timedelta] = {}

    def _report(self, message: str) -> None:
        if self.logger is not None:
            self.logger.info(message)
        else:
            print(message)

    @contextmanager
    def timer(self, operation_name: str):
        """
        Measure the wrapped block and report its duration when the context exits, whether or not the block raised.

        Parameters:
            operation_name (str): Name of the timed operation.

        Yields:
            None
        """
        start_time = datetime.now()

        try:
            yield
        finally:
            duration = datetime.now() - start_time
            self.durations[operation_name] = duration
            self._report(f"{operation_name} completed in {duration.total_seconds():.2f} seconds")

    def get_summary(self) -> Dict[str, float]:
        """Return operation names mapped to elapsed seconds."""
        return {name: duration.total_seconds()
                for name, duration in self.durations.items()}

    def print_summary(self) -> None:
        """
        Report every measured operation and the total elapsed time.

        Returns:
            None
        """
        self._report("=== Performance Summary ===")
        for name, duration in self.durations.items():
            self._report(f"{name}: {duration.total_seconds():.2f} seconds")

        if self.durations:
            total_time = sum(d.total_seconds() for d in self.durations.values())
            self._report(f"Total time: {total_time:.2f} seconds")
