from __future__ import annotations

from .lhe import LHEWriter, iter_lhe
from .ughepmc import UGHepMCReader, iter_events, iter_ughepmc

__all__ = ["LHEWriter", "UGHepMCReader", "iter_events", "iter_lhe", "iter_ughepmc"]
