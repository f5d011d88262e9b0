"""Incoming-photon synthesis from energy-momentum conservation.

The UPCgen listing has no incoming particles, but LHE expects them. Two
photons along the beam axis are built from the summed final-state
four-momentum T:

    A = (0, 0, (T.pz + T.E)/2,  (T.pz + T.E)/2)     along +z
    B = (0, 0, (T.pz - T.E)/2, -(T.pz - T.E)/2)     along -z

Both are massless and A + B = T exactly.
"""

from __future__ import annotations

from typing import Iterable

from .models import PDG_PHOTON, STATUS_INCOMING, Particle

N_INCOMING = 2


def total_final_momentum(particles: Iterable[Particle]) -> tuple[float, float, float, float]:
    """Summed (px, py, pz, E) of the particles that never decayed."""
    total = [0.0, 0.0, 0.0, 0.0]
    for p in particles:
        if p.is_final:
            for i, x in enumerate(p.momentum):
                total[i] += x
    px, py, pz, e = total
    return px, py, pz, e


def incoming_photons(particles: Iterable[Particle]) -> tuple[Particle, Particle]:
    _, _, pz, e = total_final_momentum(particles)
    plus = (pz + e) / 2.0
    minus = (pz - e) / 2.0
    photon_a = Particle(pdg_id=PDG_PHOTON, status=STATUS_INCOMING, px=0.0, py=0.0, pz=plus, energy=plus)
    photon_b = Particle(pdg_id=PDG_PHOTON, status=STATUS_INCOMING, px=0.0, py=0.0, pz=minus, energy=-minus)
    return photon_a, photon_b


def with_incoming_photons(particles: list[Particle]) -> list[Particle]:
    """Return a new list with the two synthesized photons in front.

    Every original particle moves down by N_INCOMING positions.
    """
    photon_a, photon_b = incoming_photons(particles)
    return [photon_a, photon_b, *particles]
