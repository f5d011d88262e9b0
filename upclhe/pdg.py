"""PDG helpers backed by scikit-hep ``particle``."""

from __future__ import annotations

from particle import PDGID as _PDGID
from particle import InvalidParticle, ParticleNotFound
from particle import Particle as _Particle


def is_valid_pdg_id(pdg_id: int) -> bool:
    return bool(_PDGID(pdg_id).is_valid)


def name(pdg_id: int) -> str:
    try:
        return _Particle.from_pdgid(pdg_id).name
    except (InvalidParticle, ParticleNotFound):
        return str(pdg_id)
