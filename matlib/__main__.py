"""
MatLib Command Line Interface

Usage:
    python -m matlib [--mode MODE] [--window P] FILE [FILE]

Modes:
    ncc         Normalized cross-correlation of TEMPLATE against SIGNAL (default)
    xcorr       Raw cross-correlation of TEMPLATE against SIGNAL
    acorr       Auto-correlation of a single series
    psd         Power spectral density of a single power-of-two length series
    convolve    Moving-average FFT convolution of a single series (needs --window)

Input files hold one number per line; results are printed one per line.

Examples:
    python -m matlib pulse.txt signal.txt
    python -m matlib --mode psd signal.txt
    python -m matlib --mode convolve --window 10 original.txt
"""

import argparse
import logging
import sys
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from matlib.core.exceptions import MatLibError
from matlib.spectral import (
    auto_correlation, cross_correlation, fft_convolution,
    normalized_cross_correlation, power_spectral_density
)
from matlib.utils.data_io import read_series, write_series

logger = logging.getLogger("matlib.cli")

# mode -> (number of input files, computation)
MODES: Dict[str, Tuple[int, Callable[..., np.ndarray]]] = {
    "ncc": (2, lambda series, args: normalized_cross_correlation(series[0], series[1])),
    "xcorr": (2, lambda series, args: cross_correlation(series[0], series[1])),
    "acorr": (1, lambda series, args: auto_correlation(series[0])),
    "psd": (1, lambda series, args: power_spectral_density(series[0])),
    "convolve": (1, lambda series, args: fft_convolution(series[0], args.window)),
}


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the driver."""
    parser = argparse.ArgumentParser(
        prog="python -m matlib",
        description="Correlation and spectral analysis of newline-delimited numeric series",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        metavar="FILE",
        help="Input series: TEMPLATE SIGNAL for ncc/xcorr, one file otherwise"
    )
    parser.add_argument(
        "--mode",
        choices=sorted(MODES),
        default="ncc",
        help="Computation to run (default: ncc)"
    )
    parser.add_argument(
        "--window",
        type=int,
        default=None,
        help="Averaging width for --mode convolve"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the driver.

    Returns:
        int: 0 on success, 1 if the kernel or the input files reported an error
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    expected, compute = MODES[args.mode]
    if len(args.inputs) != expected:
        parser.error(f"--mode {args.mode} takes {expected} input file(s), got {len(args.inputs)}")
    if args.mode == "convolve" and args.window is None:
        parser.error("--mode convolve requires --window")

    try:
        series = [read_series(path) for path in args.inputs]
        result = compute(series, args)
    except MatLibError as e:
        logger.debug(f"Driver failed in mode {args.mode}", exc_info=True)
        print(f"error: {e.message}", file=sys.stderr)
        return 1

    write_series(result, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
