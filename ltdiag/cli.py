#!/usr/bin/env python3
"""
LTdiag CLI Entry Point

This module provides the main entry point for the ltdiag command-line interface.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

import sys

from ltdiag.processing.cli_unified import main

if __name__ == "__main__":
    sys.exit(main())
