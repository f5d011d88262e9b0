"""Translate single-parent indices into LHE's two mother slots."""

from __future__ import annotations

from .models import Particle
from .synthesis import N_INCOMING

# Both synthesized photons, as 1-based LHE positions
_BOTH_PHOTONS = (1, 2)


def parent_slots(particle: Particle) -> tuple[int, int]:
    """LHE (MOTHUP1, MOTHUP2) for a particle of the photon-prefixed list.

    Incoming photons have no mothers. A top-level particle comes from both
    photons; any other particle has a single mother, shifted past the
    inserted photons.
    """
    if particle.status <= 0:
        return 0, 0
    if particle.mother == 0:
        return _BOTH_PHOTONS
    return particle.mother + N_INCOMING, 0


def remap_parents(particles: list[Particle]) -> list[tuple[int, int]]:
    return [parent_slots(p) for p in particles]
