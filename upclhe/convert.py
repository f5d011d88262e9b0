"""High-level conversion API."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from .io.lhe import LHEWriter
from .io.ughepmc import iter_ughepmc, open_listing
from .models import Event, RunInfo
from .pdg import name as pdg_name
from .validation import validate_file
from .xsec import default_xsec_path, read_cross_sections


def default_output_path(input_path: Union[str, Path]) -> Path:
    """``<input stem>.lhe`` in the current working directory."""
    p = Path(input_path)
    if p.suffix == ".gz":
        p = p.with_suffix("")
    return Path(p.stem + ".lhe")


def convert(
    input_path: Union[str, Path],
    beam_energy: tuple[float, float],
    *,
    output_path: Optional[Union[str, Path]] = None,
    xsec_path: Optional[Union[str, Path]] = None,
    validate: bool = False,
    momentum_tolerance: float = 1e-4,
    quiet: bool = False,
) -> dict:
    """Convert a UPCgen event listing to an LHE file.

    Streaming: one event is parsed, completed with its incoming photons and
    written before the next is read. A malformed record raises FormatError;
    events written before it stay in the (unterminated) output file.
    """
    if output_path is None:
        output_path = default_output_path(input_path)
    if xsec_path is None:
        xsec_path = default_xsec_path(input_path)

    n_particles = 0
    pdg_counts: dict[int, int] = {}

    def _counting(it: Iterable[Event]) -> Iterator[Event]:
        nonlocal n_particles
        for ev in it:
            n_particles += len(ev.particles)
            for p in ev.particles:
                pdg_counts[p.pdg_id] = pdg_counts.get(p.pdg_id, 0) + 1
            yield ev

    # input before output: an unreadable input must not create the output file
    with open_listing(str(input_path)) as fin:
        fid, tot = read_cross_sections(xsec_path)
        run_info = RunInfo(
            beam_energy=(float(beam_energy[0]), float(beam_energy[1])),
            fiducial_cross_section=fid,
            total_cross_section=tot,
        )

        if not quiet:
            print("Converting UPCGen HEPMC output to LHE format", file=sys.stderr)
            print(f"Reading: {input_path}", file=sys.stderr)
            print(f"Writing lhe: {output_path}", file=sys.stderr)

        n_events = LHEWriter().write(str(output_path), _counting(iter_ughepmc(fin)), run_info)

    if not quiet:
        print(f"  Wrote {n_events} events", file=sys.stderr)

    report = None
    if validate:
        report = validate_file(output_path, momentum_tolerance=momentum_tolerance)
        if report.n_events != n_events:
            raise ValueError(f"Expected {n_events} event blocks in {output_path}, found {report.n_events}")
        if not quiet:
            print(f"  {report.n_errors} validation errors, {report.n_warnings} warnings", file=sys.stderr)

    top_pdg = sorted(pdg_counts.items(), key=lambda x: -x[1])[:10]

    return {
        "output": str(output_path),
        "n_events": n_events,
        "n_particles": n_particles,
        "run_info": run_info,
        "top_particles": [(pdg_name(pid), count) for pid, count in top_pdg],
        "validation": report,
    }
