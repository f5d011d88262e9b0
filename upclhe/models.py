"""
Core event data model for upclhe.

Events are read from the UPCgen HepMC-style listing into these types and
written out as LHE. Only one event is held in memory at a time.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

# Status codes (LHE convention)
STATUS_INCOMING = -1
STATUS_FINAL = 1
STATUS_HAS_DAUGHTER = 2

PDG_PHOTON = 22
PDG_PROTON = 2212

# Subprocess id written for every event (LPRUP / IDPRUP)
PROCESS_ID = 81

DEFAULT_FIDUCIAL_XSEC = 1.0  # pb
DEFAULT_TOTAL_XSEC = 3.0  # pb


@dataclass
class Particle:
    """A single particle in an event.

    Attributes:
        pdg_id: PDG Monte Carlo particle ID.
        status: Status code. Convention:
            -1  = incoming
             1  = final state (stable outgoing)
             2  = has at least one daughter in the event
        px, py, pz, energy: Four-momentum components, in the input units.
        mother: 1-based index of the parent particle within the event
            (0 = no parent).
        mother2: Second LHE mother slot. Only filled when reading LHE back.
        mass: Mass field as read from the input. Never written; the output
            mass is always ``computed_mass``.
        status_field: Status token as read from the input.
    """

    pdg_id: int
    status: int
    px: float
    py: float
    pz: float
    energy: float
    mother: int = 0
    mother2: int = 0
    mass: float = 0.0
    status_field: int = 0

    @property
    def momentum(self) -> tuple[float, float, float, float]:
        return (self.px, self.py, self.pz, self.energy)

    @property
    def computed_mass(self) -> float:
        """Mass computed from four-momentum.

        Numerically, m^2 = E^2 - |p|^2 can drift slightly negative for
        ultra-relativistic / tiny-mass particles. We clamp small negative
        values to zero; a genuinely spacelike vector gives a negative mass.
        """
        m2 = self.energy**2 - self.px**2 - self.py**2 - self.pz**2
        if m2 < 0 and abs(m2) < 1e-8:
            m2 = 0.0
        return math.sqrt(m2) if m2 >= 0 else -math.sqrt(-m2)

    @property
    def is_incoming(self) -> bool:
        return self.status == STATUS_INCOMING

    @property
    def is_final(self) -> bool:
        return self.status == STATUS_FINAL

    @property
    def has_daughter(self) -> bool:
        return self.status == STATUS_HAS_DAUGHTER


@dataclass
class RunInfo:
    """Run-level metadata, fixed for the whole conversion.

    Attributes:
        beam_energy: Tuple of (beam1, beam2) energies in GeV.
        fiducial_cross_section: Fiducial cross section in pb.
        total_cross_section: Total cross section in pb.
        beam_pdg_id: Tuple of (beam1, beam2) PDG IDs.
        process_id: Subprocess identifier.
    """

    beam_energy: tuple[float, float] = (0.0, 0.0)
    fiducial_cross_section: float = DEFAULT_FIDUCIAL_XSEC
    total_cross_section: float = DEFAULT_TOTAL_XSEC
    beam_pdg_id: tuple[int, int] = (PDG_PROTON, PDG_PROTON)
    process_id: int = PROCESS_ID


@dataclass
class Event:
    """A single physics event.

    Attributes:
        event_number: Event index from the input (not necessarily contiguous).
        particles: List of particles in the event.
        n_particles: Declared number of particles.
        n_vertices: Declared number of vertices (unused).
        units: (momentum, length) unit labels, passed through unconverted.
    """

    event_number: int = 0
    particles: list[Particle] = field(default_factory=list)
    n_particles: int = 0
    n_vertices: int = 0
    units: Optional[tuple[str, str]] = None

    @property
    def incoming_particles(self) -> list[Particle]:
        return [p for p in self.particles if p.is_incoming]

    @property
    def final_particles(self) -> list[Particle]:
        return [p for p in self.particles if p.is_final]
