#!/usr/bin/env python3

"""
Unified Command Line Interface for LTdiag

This module provides the ltdiag command-line interface for composing and inspecting the legend and detection-year classes of LandTrendr-style disturbance products. It implements an argparse-based CLI with one subcommand per task, a YAML configuration file with command-line overrides applied through a fresh validated LTConfig, logging through LTLogger with quiet, normal and verbose levels, and stage timing through PerformanceMonitor. Configuration problems are reported as errors and produce exit status 1 before any file is written; a keyboard interrupt exits with status 130.

Classes:
    LTUnifiedCLI: Main class implementing the unified command-line interface.

Commands:
    legend: Render the composite legend of the configured products to image files.
    bins: Report the detection-year bins with their ranges, labels and colors.
    describe: Report the interpretation text of each disturbance product.

Functions:
    main: Entry point returning a Unix exit status.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

import sys
import argparse
import textwrap
import logging
import dataclasses
from typing import Any, Dict, List, Optional

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from .. import __version__
from .binning import RangeBinner
from .constants import LEGEND_POSITIONS, ORIENTATION_SIDE_BY_SIDE, ORIENTATION_STACKED
from .utils_config import LTConfig
from .utils_logger import LTLogger
from .utils_monitor import PerformanceMonitor
from .utils_validator import ConfigurationError
from ..diagnostics.disturbance import DisturbanceDiagnostics
from ..visualization.legend_renderer import MatplotlibLegendRenderer
from ..visualization.styling import LTVisualizationStyle


class LTUnifiedCLI:
    """
    Unified command-line interface for LTdiag.

    Features:
    - Legend rendering to several image formats
    - Detection-year bin tables
    - Product interpretation summaries
    - YAML configuration with command-line overrides
    - Performance monitoring and logging
    """

    COMMANDS = {
        'legend': 'Render the composite disturbance legend',
        'bins': 'Report detection-year bins and labels',
        'describe': 'Report product interpretation texts'
    }

    def __init__(self) -> None:
        self.logger: Optional[LTLogger] = None
        self.perf_monitor: Optional[PerformanceMonitor] = None
        self.config: Optional[LTConfig] = None

    def create_main_parser(self) -> argparse.ArgumentParser:
        """
        Construct the main argument parser with global options and one subparser per command. Global options cover the configuration file, verbosity, log file and version; domain options are shared by all subcommands.

        Parameters:
            None

        Returns:
            argparse.ArgumentParser: Configured parser.
        """
        parser = argparse.ArgumentParser(
            prog='ltdiag',
            description='LandTrendr Disturbance Classification and Legend Tool',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=textwrap.dedent("""
            Examples:
              # Render the composite legend with default settings
              ltdiag legend --output ./output/ltdiag_legend

              # Stacked legend in the top-right corner, PNG and PDF
              ltdiag legend --orientation stacked --position top-right --formats png pdf

              # Detection-year bins for a shorter analysis period
              ltdiag bins --start-year 2000 --end-year 2020

              # Use configuration file
              ltdiag --config ltdiag_config.yaml legend
            """)
        )

        parser.add_argument('--config', type=str, help='Configuration file path (YAML format)')
        parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose output')
        parser.add_argument('--quiet', '-q', action='store_true', help='Suppress output messages')
        parser.add_argument('--log-file', type=str, help='Log file path')
        parser.add_argument('--save-config', type=str, help='Write the effective configuration to this YAML file')
        parser.add_argument('--version', action='version', version=f'LTdiag {__version__}')

        subparsers = parser.add_subparsers(
            dest='command',
            title='Commands',
            description='Choose the task to perform',
            help='Available commands'
        )

        self._add_legend_parser(subparsers)
        self._add_bins_parser(subparsers)
        self._add_describe_parser(subparsers)

        return parser

    def _add_domain_arguments(self, parser: argparse.ArgumentParser) -> None:
        group = parser.add_argument_group('Analysis Domain')
        group.add_argument('--start-year', type=int, help='First analysis year (default: 1985)')
        group.add_argument('--end-year', type=int, help='Last analysis year (default: 2025)')
        group.add_argument('--yod-palette', type=str, nargs='+',
                           help='Detection-year palette, one color per bin')

    def _add_legend_parser(self, subparsers: Any) -> None:
        parser = subparsers.add_parser('legend', help=self.COMMANDS['legend'],
                                       formatter_class=argparse.ArgumentDefaultsHelpFormatter)
        self._add_domain_arguments(parser)

        layout = parser.add_argument_group('Legend Layout')
        layout.add_argument('--orientation', choices=[ORIENTATION_SIDE_BY_SIDE, ORIENTATION_STACKED],
                            help='Panel arrangement')
        layout.add_argument('--position', choices=list(LEGEND_POSITIONS), help='Anchor corner')
        layout.add_argument('--decimals', type=int, help='Decimal places of continuous labels')

        output = parser.add_argument_group('Output')
        output.add_argument('--output', type=str, help='Output path without extension')
        output.add_argument('--formats', type=str, nargs='+', help='Output formats (e.g. png pdf svg)')
        output.add_argument('--dpi', type=int, help='Output resolution')

    def _add_bins_parser(self, subparsers: Any) -> None:
        parser = subparsers.add_parser('bins', help=self.COMMANDS['bins'])
        self._add_domain_arguments(parser)

    def _add_describe_parser(self, subparsers: Any) -> None:
        subparsers.add_parser('describe', help=self.COMMANDS['describe'])

    def _cli_overrides(self, args: argparse.Namespace) -> Dict[str, Any]:
        mapping = {
            'start_year': 'start_year',
            'end_year': 'end_year',
            'yod_palette': 'yod_palette',
            'orientation': 'legend_orientation',
            'position': 'legend_position',
            'decimals': 'legend_decimals',
            'output': 'output',
            'formats': 'output_formats',
            'dpi': 'dpi',
        }
        overrides = {
            field: getattr(args, arg) for arg, field in mapping.items()
            if getattr(args, arg, None) is not None
        }

        if args.verbose:
            overrides['verbose'] = True
        if args.quiet:
            overrides['quiet'] = True
            overrides['verbose'] = False

        return overrides

    def parse_args_to_config(self, args: argparse.Namespace) -> LTConfig:
        """
        Build the effective configuration: the YAML file when given, otherwise the defaults, with command-line values replacing file values. The result is a new LTConfig and is validated on construction.

        Parameters:
            args (argparse.Namespace): Parsed arguments.

        Returns:
            LTConfig: Validated configuration.
        """
        base = LTConfig.load_from_file(args.config) if args.config else LTConfig()
        overrides = self._cli_overrides(args)
        return dataclasses.replace(base, **overrides) if overrides else base

    def setup_logging(self, args: argparse.Namespace, log_file: Optional[str] = None) -> LTLogger:
        """
        Create the CLI logger: quiet shows errors only, verbose adds debug output, otherwise INFO.

        Parameters:
            args (argparse.Namespace): Parsed arguments carrying the quiet and verbose flags.
            log_file (Optional[str]): Log file path (default: None).

        Returns:
            LTLogger: Configured logger.
        """
        log_level = logging.INFO
        if args.quiet:
            log_level = logging.ERROR
        elif args.verbose:
            log_level = logging.DEBUG

        self.logger = LTLogger(name="ltdiag-cli", level=log_level, log_file=log_file, verbose=not args.quiet)
        return self.logger

    def run_analysis(self, command: str, config: LTConfig) -> bool:
        """
        Execute one command under the performance monitor.

        Parameters:
            command (str): Subcommand name.
            config (LTConfig): Validated configuration.

        Returns:
            bool: True on success.
        """
        runners = {
            'legend': self._run_legend,
            'bins': self._run_bins,
            'describe': self._run_describe,
        }

        with self.perf_monitor.timer(f"{command} command"):
            runners[command](config)

        if config.verbose:
            self.perf_monitor.print_summary()

        return True

    def _run_legend(self, config: LTConfig) -> List[str]:
        diagnostics = DisturbanceDiagnostics(config, self.logger)

        with self.perf_monitor.timer("Legend composition"):
            legend = diagnostics.build_legend()

        renderer = MatplotlibLegendRenderer()
        output_path = config.output or "ltdiag_legend"

        with self.perf_monitor.timer("Legend rendering"):
            fig = renderer.render_figure(legend, figsize=config.figure_size)
            try:
                LTVisualizationStyle.add_timestamp_and_branding(fig)
                written = LTVisualizationStyle.save_plot(fig, output_path, list(config.output_formats),
                                                         dpi=config.dpi)
            finally:
                plt.close(fig)

        for path in written:
            self.logger.info(f"Legend written: {path}")

        return written

    def _run_bins(self, config: LTConfig) -> None:
        binner = RangeBinner.from_config(config)

        self.logger.info(f"Domain {binner.domain_min}-{binner.domain_max}, "
                         f"{binner.n_bins} bins of {binner.bin_size} years")

        for bin_, color in zip(binner.bins(), config.yod_palette):
            self.logger.info(f"  class {bin_.index}: {bin_.label:<12} {color}")

    def _run_describe(self, config: LTConfig) -> None:
        descriptions = DisturbanceDiagnostics(config).describe_products()

        for title, text in descriptions.items():
            self.logger.info(f"{title}:\n{text}")

    def _print_config_summary(self) -> None:
        if self.logger and self.config:
            self.logger.debug("=== Configuration Summary ===")
            for key, value in self.config.to_dict().items():
                if value is not None:
                    self.logger.debug(f"  {key}: {value}")

    def main(self, argv: Optional[List[str]] = None) -> int:
        """
        Parse arguments, build and validate the configuration, and run the requested command. Configuration errors are logged and reported with exit status 1; keyboard interrupts exit with 130.

        Parameters:
            argv (Optional[List[str]]): Arguments without the program name (default: sys.argv[1:]).

        Returns:
            int: Unix exit code, 0 on success, 1 on error, 130 on interruption.
        """
        parser = self.create_main_parser()
        args = parser.parse_args(argv)

        if not args.command:
            parser.print_help()
            return 1

        try:
            self.setup_logging(args, args.log_file)
            self.perf_monitor = PerformanceMonitor(self.logger)

            with self.perf_monitor.timer("Configuration"):
                self.config = self.parse_args_to_config(args)

            self._print_config_summary()

            if args.save_config:
                self.config.save_to_file(args.save_config)

            success = self.run_analysis(args.command, self.config)
            return 0 if success else 1

        except KeyboardInterrupt:
            print("\nAnalysis interrupted by user")
            return 130
        except (ConfigurationError, OSError) as e:
            if self.logger:
                self.logger.error(f"{type(e).__name__}: {e}")
            else:
                print(f"Error: {e}")
            return 1
        except Exception as e:
            import traceback
            if self.logger:
                self.logger.error(f"Unexpected error: {e}")
                self.logger.error(traceback.format_exc())
            else:
                print(f"Error: {e}")
                traceback.print_exc()
            return 1


def main(argv: Optional[List[str]] = None) -> int:
    """
    Module-level entry point registered as the ltdiag console script.

    Parameters:
        argv (Optional[List[str]]): Arguments without the program name (default: sys.argv[1:]).

    Returns:
        int: Unix exit status.
    """
    cli = LTUnifiedCLI()
    return cli.main(argv)


if __name__ == "__main__":
    sys.exit(main())
