#!/usr/bin/env python3

"""
LTdiag Logging Utilities

This module provides the logging wrapper used by the LTdiag command-line interface, the diagnostics pipeline and the example scripts. LTLogger configures a named standard-library logger with a timestamped formatter, an optional stdout handler and an optional file handler, and forwards info, warning, error and debug messages to it. Library classes never create a logger on their own; they accept an optional LTLogger and stay silent without one.

Classes:
    LTLogger: Logging utility wrapper with configurable console and file output handlers.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

import sys
import logging
from typing import Optional


class LTLogger:
    """
    Logging utility wrapper for LTdiag workflows with configurable console and file output handlers. Console output goes to stdout when verbose is enabled, a log file receives the same records when a path is given, and existing handlers of the named logger are cleared on construction so that repeated CLI invocations within one process do not duplicate messages.
    """

    def __init__(self, name: str = "ltdiag", level: int = logging.INFO,
                 log_file: Optional[str] = None, verbose: bool = True) -> None:
        """
        Create a named logger with a standardized timestamp formatter and the requested handlers.

        Parameters:
            name (str): Logger name (default: "ltdiag").
            level (int): Minimum logging level threshold (default: logging.INFO).
            log_file (Optional[str]): Path of a log file, None disables file logging (default: None).
            verbose (bool): Enable the stdout console handler (default: True).

        Returns:
            None
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)

        self.logger.handlers.clear()

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        if verbose:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def info(self, message: str) -> None:
        """Log an informational progress message at INFO level."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a recoverable but unexpected condition at WARNING level."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log a failure that stops the requested operation at ERROR level."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log diagnostic detail at DEBUG level."""
        self.logger.debug(message)
