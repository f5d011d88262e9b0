"""
Command-line interface for upclhe.

Usage:
    upclhe events.hepmc 6800 6800
    upclhe events.hepmc 6800 6800 --output run1.lhe --validate
"""

from __future__ import annotations

import argparse
import sys

import upclhe

from .errors import FormatError, ResourceError, UsageError

USAGE = "Usage: upclhe <INPUT_FILE> <BEAM_1_E> <BEAM_2_E>"


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="upclhe",
        description="Convert UPCgen HepMC event listings to Les Houches Event files.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {upclhe.__version__}"
    )
    parser.add_argument("input", help="UPCgen event listing (may be gzipped)")
    parser.add_argument("beam1_energy", type=float, help="Beam 1 energy [GeV]")
    parser.add_argument("beam2_energy", type=float, help="Beam 2 energy [GeV]")
    parser.add_argument(
        "--output", "-o", default=None,
        help="Output LHE path (default: <input stem>.lhe in the current directory)",
    )
    parser.add_argument(
        "--xsec-file", dest="xsec_file", default=None,
        help="Cross-section file (default: xsec.out next to the input)",
    )
    parser.add_argument(
        "--validate", action="store_true",
        help="Re-read the written file and check momentum conservation",
    )
    parser.add_argument(
        "--momentum-tolerance", type=float, default=1e-4,
        help="Relative tolerance for momentum conservation (default: 1e-4)",
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true",
        help="Suppress progress output",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError:
        print("Invalid input parameters!")
        print(USAGE)
        return 1

    from .convert import convert

    try:
        result = convert(
            args.input,
            (args.beam1_energy, args.beam2_energy),
            output_path=args.output,
            xsec_path=args.xsec_file,
            validate=args.validate,
            momentum_tolerance=args.momentum_tolerance,
            quiet=args.quiet,
        )
    except (FormatError, ResourceError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"{result['n_events']} events written in {result['output']}")

    report = result["validation"]
    if report is not None and not report.is_valid:
        print(str(report), file=sys.stderr)
        return 2  # Validation errors (but conversion completed)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
