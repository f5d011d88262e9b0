from __future__ import annotations

import gzip
import io
import math
import re
from pathlib import Path
from typing import Iterable, Iterator, Optional

from ..errors import FormatError, ResourceError
from ..models import STATUS_FINAL, STATUS_HAS_DAUGHTER, Event, Particle


# --- UPCgen HepMC event listing ----------------------------------------------------------
#
# UPCgen writes a reduced HepMC-style listing with three record types per event:
#   E <evtno> <nvertices> <nparticles>
#   U <mom_unit> <len_unit>
#   P <position> <parent> <pdg> <px> <py> <pz> <e> <m> <status>   (nparticles times)
#
# Parents are referenced by 1-based position and always precede their daughters.
# Other lines outside an event (HepMC:: banners, blank lines) are skipped; a P line there
# means the declared particle count was wrong. Any malformed record aborts the whole
# conversion.

END_MARKER = "END_EVENT_LISTING"

_STAGE_EVENT = "event line"
_STAGE_TRACK = "track line"

# Plain decimal literals only: no underscores, nan or inf
_INT = re.compile(r"[+-]?\d+\Z", re.ASCII)
_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\Z", re.ASCII)


def open_listing(path: str):
    p = Path(path)
    try:
        if p.suffix == ".gz":
            return io.TextIOWrapper(gzip.open(p, "rb"), encoding="utf-8", errors="replace")
        return open(p, "r", encoding="utf-8", errors="replace")
    except OSError as e:
        raise ResourceError(f"Failed to open input file: {path}") from e


def _to_int(tok: str) -> int:
    if not _INT.match(tok):
        raise ValueError(f"not an integer: {tok!r}")
    return int(tok)


def _to_float(tok: str) -> float:
    if not _FLOAT.match(tok):
        raise ValueError(f"not a number: {tok!r}")
    x = float(tok)
    if not math.isfinite(x):
        raise ValueError(f"out of range: {tok!r}")
    return x


def add_particle(
    particles: list[Particle],
    pdg_id: int,
    mother: int,
    momentum: tuple[float, float, float, float],
    *,
    mass: float = 0.0,
    status_field: int = 0,
) -> Particle:
    """Append a final-state particle and mark its parent as decayed.

    The parent must already be in ``particles``: positions are 1-based and a
    parent always comes before its daughters.
    """
    px, py, pz, e = momentum
    p = Particle(
        pdg_id=pdg_id,
        status=STATUS_FINAL,
        px=px,
        py=py,
        pz=pz,
        energy=e,
        mother=mother,
        mass=mass,
        status_field=status_field,
    )
    if not 0 <= mother <= len(particles):
        raise ValueError(f"Parent index {mother} does not refer to an earlier particle")
    particles.append(p)
    if mother > 0:
        particles[mother - 1].status = STATUS_HAS_DAUGHTER
    return p


def _parse_event_line(line: str, lineno: int) -> Event:
    parts = line.split()
    if len(parts) < 4 or parts[0] != "E":
        raise FormatError(_STAGE_EVENT, line.strip(), lineno)
    try:
        evtno, nvtx, npar = _to_int(parts[1]), _to_int(parts[2]), _to_int(parts[3])
    except ValueError:
        raise FormatError(_STAGE_EVENT, line.strip(), lineno) from None
    if npar < 0:
        raise FormatError(_STAGE_EVENT, line.strip(), lineno)
    return Event(event_number=evtno, n_particles=npar, n_vertices=nvtx)


def _parse_units_line(line: Optional[str], lineno: Optional[int]) -> Optional[tuple[str, str]]:
    if line is None:
        raise FormatError(_STAGE_EVENT, None, lineno)
    parts = line.split()
    if not parts or parts[0] != "U":
        raise FormatError(_STAGE_EVENT, line.strip(), lineno)
    if len(parts) >= 3:
        return parts[1], parts[2]
    return None


def _parse_particle_line(line: Optional[str], lineno: Optional[int], position: int):
    if line is None:
        raise FormatError(_STAGE_TRACK, None, lineno)
    parts = line.split()
    if len(parts) < 10 or parts[0] != "P":
        raise FormatError(_STAGE_TRACK, line.strip(), lineno)
    try:
        pos, mother, pdg = _to_int(parts[1]), _to_int(parts[2]), _to_int(parts[3])
        px, py, pz = _to_float(parts[4]), _to_float(parts[5]), _to_float(parts[6])
        e, m = _to_float(parts[7]), _to_float(parts[8])
        status_field = _to_int(parts[9])
    except ValueError:
        raise FormatError(_STAGE_TRACK, line.strip(), lineno) from None
    # position must match the sequence, and parents must come first
    if pos != position or mother >= pos or mother < 0:
        raise FormatError(_STAGE_TRACK, line.strip(), lineno)
    return pdg, mother, (px, py, pz, e), m, status_field


def iter_ughepmc(lines: Iterable[str]) -> Iterator[Event]:
    """Parse a UPCgen event listing, yielding one completed event at a time."""
    numbered = enumerate(lines, start=1)
    for lineno, line in numbered:
        if END_MARKER in line:
            return
        if line.startswith("P "):
            # more particle lines than the event header declared
            raise FormatError(_STAGE_TRACK, line.strip(), lineno)
        if not line.startswith("E "):
            continue

        event = _parse_event_line(line, lineno)

        u_lineno, u_line = next(numbered, (None, None))
        event.units = _parse_units_line(u_line, u_lineno)

        for position in range(1, event.n_particles + 1):
            p_lineno, p_line = next(numbered, (None, None))
            pdg, mother, momentum, mass, status_field = _parse_particle_line(p_line, p_lineno, position)
            add_particle(event.particles, pdg, mother, momentum, mass=mass, status_field=status_field)

        yield event


def iter_events(path: str) -> Iterator[Event]:
    """Iterate events from a UPCgen listing file (optionally gzipped)."""
    with open_listing(path) as f:
        yield from iter_ughepmc(f)


class UGHepMCReader:
    def iter_events(self, path: str) -> Iterator[Event]:
        return iter_events(path)

    def read(self, path: str) -> list[Event]:
        return list(iter_events(path))
