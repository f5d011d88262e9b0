"""Cross-section side file written by UPCgen next to its event listing."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Union

from .models import DEFAULT_FIDUCIAL_XSEC, DEFAULT_TOTAL_XSEC

XSEC_FILENAME = "xsec.out"


def default_xsec_path(input_path: Union[str, Path]) -> Path:
    return Path(input_path).parent / XSEC_FILENAME


def read_cross_sections(path: Union[str, Path]) -> tuple[float, float]:
    """Return (fiducial, total) cross sections in pb.

    A missing file silently gives the defaults. A file without two numbers
    also gives the defaults, with a warning.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError:
        return DEFAULT_FIDUCIAL_XSEC, DEFAULT_TOTAL_XSEC

    tokens = text.split()
    try:
        return float(tokens[0]), float(tokens[1])
    except (IndexError, ValueError):
        print(
            f"Warning: cannot read cross sections from {p}; "
            f"using {DEFAULT_FIDUCIAL_XSEC} and {DEFAULT_TOTAL_XSEC} pb",
            file=sys.stderr,
        )
        return DEFAULT_FIDUCIAL_XSEC, DEFAULT_TOTAL_XSEC
