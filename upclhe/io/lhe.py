from __future__ import annotations

import gzip
import io
import re
from pathlib import Path
from typing import Iterable, Iterator, Optional, TextIO

from ..errors import ResourceError
from ..models import Event, Particle, RunInfo
from ..remap import parent_slots
from ..synthesis import with_incoming_photons

_TAG_EVENT_OPEN = re.compile(r"<event\b")
_TAG_EVENT_CLOSE = re.compile(r"</event>")

LHE_VERSION = "3.0"
COMMENT = " #Converted from UPCGEN generator HEPMC output "

# Fixed init fields: PDF author group (1, 2), PDF set id (1, 2), weight strategy, # subprocesses
_INIT_PDF_FIELDS = "0 0 0 0"
WEIGHT_STRATEGY = 3
N_SUBPROCESSES = 1
# Fixed event header: weight, scale, alpha_em, alpha_s
_EVENT_SENTINELS = "1.0 -1.0 -1.0 -1.0"
# Fixed particle fields: colour tags, proper lifetime, spin
_COLOR_FLOW = "0 0"
_LIFETIME_SPIN = "0.0000e+00 9.0000e+00"


def _open_text(path: str):
    p = Path(path)
    if p.suffix == ".gz":
        return io.TextIOWrapper(gzip.open(p, "rb"), encoding="utf-8", errors="replace")
    return open(p, "r", encoding="utf-8", errors="replace")


def iter_lhe(path: str) -> Iterator[Event]:
    """Read LHE event blocks back into events (mothers kept as LHE slots)."""
    with _open_text(path) as f:
        in_event = False
        buf: list[str] = []
        event_no = 0
        for line in f:
            if not in_event:
                if _TAG_EVENT_OPEN.search(line):
                    in_event = True
                    buf = []
                continue
            if _TAG_EVENT_CLOSE.search(line):
                event_no += 1
                yield _parse_event_block(buf, event_no)
                in_event = False
                buf = []
            else:
                buf.append(line)


def _parse_event_block(lines: list[str], event_number: int) -> Event:
    rows = [s for s in (ln.strip() for ln in lines) if s and not s.startswith("#")]
    if not rows:
        return Event(event_number=event_number)

    # nup idprup xwgtup scalup aqedup aqcdup
    nup = int(rows[0].split()[0])
    particles: list[Particle] = []
    for s in rows[1:nup + 1]:
        cols = s.split()
        # id status mother1 mother2 col1 col2 px py pz E M lifetime spin
        particles.append(Particle(
            pdg_id=int(cols[0]),
            status=int(cols[1]),
            mother=int(cols[2]),
            mother2=int(cols[3]),
            px=float(cols[6]),
            py=float(cols[7]),
            pz=float(cols[8]),
            energy=float(cols[9]),
            mass=float(cols[10]),
        ))
    return Event(event_number=event_number, particles=particles, n_particles=nup)


def format_particle(p: Particle) -> str:
    m1, m2 = parent_slots(p)
    return (
        f"{p.pdg_id} {p.status} {m1} {m2} {_COLOR_FLOW} "
        f"{p.px:.10e} {p.py:.10e} {p.pz:.10e} {p.energy:.10e} {p.computed_mass:.10e} {_LIFETIME_SPIN}"
    )


class LHEWriter:
    def write_header(self, out: TextIO, run: RunInfo) -> None:
        out.write(f"<LesHouchesEvents version=\"{LHE_VERSION}\">\n")
        out.write(f"<!-- \n{COMMENT}\n-->\n")
        out.write("<header>\n</header>\n")
        # LHE format: https://arxiv.org/pdf/hep-ph/0109068.pdf
        out.write("<init>\n")
        out.write(
            f"{run.beam_pdg_id[0]} {run.beam_pdg_id[1]} "
            f"{run.beam_energy[0]:.8e} {run.beam_energy[1]:.8e} "
            f"{_INIT_PDF_FIELDS} {WEIGHT_STRATEGY} {N_SUBPROCESSES}\n"
        )
        # cross section [pb], stat. unc. [pb], maximum weight, subprocess id
        out.write(f"{run.fiducial_cross_section:.8e} {0.0:.8e} {run.total_cross_section:.8e} {run.process_id}\n")
        out.write("</init>\n")

    def write_event(self, out: TextIO, ev: Event, run: RunInfo) -> None:
        particles = with_incoming_photons(ev.particles)
        out.write("<event>\n")
        out.write(f"{len(particles)} {run.process_id} {_EVENT_SENTINELS}\n")
        for p in particles:
            out.write(format_particle(p) + "\n")
        out.write("</event>\n")

    def write(self, path: str, events: Iterable[Event], run_info: Optional[RunInfo]) -> int:
        """Write a complete LHE document; returns the number of events written.

        If ``events`` raises, the file is closed as-is without the closing tag.
        """
        p = Path(path)
        try:
            if p.suffix == ".gz":
                fh = gzip.open(p, "wt", encoding="utf-8")
            else:
                fh = open(p, "w", encoding="utf-8")
        except OSError as e:
            raise ResourceError(f"Failed to open output file: {path}") from e

        run = run_info or RunInfo()
        n_events = 0
        with fh as out:
            self.write_header(out, run)
            for ev in events:
                self.write_event(out, ev, run)
                n_events += 1
            out.write("</LesHouchesEvents>\n")
        return n_events
