"""Test fixtures.

Small UPCgen listings are (re)generated at test collection time so the
suite does not depend on fixture files being shipped.
"""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES = Path(__file__).resolve().parent / "fixtures"


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


# Two events: a J/psi decaying to a muon pair, then a bare dimuon.
DIMUON = """HepMC::Version 3.02.02
HepMC::Asciiv3-START_EVENT_LISTING
E 0 1 3
U GEV MM
P 1 0 443 0.1 -0.05 2.0 2.8481 3.0969 2
P 2 1 13 0.9 0.4 1.5 1.7975 0.10566 1
P 3 1 -13 -0.8 -0.45 0.5 1.0506 0.10566 1
E 5 0 2
U GEV MM
P 1 0 13 0.5 0.2 1.0 1.1407 0.10566 1
P 2 0 -13 -0.5 -0.2 -3.0 3.0498 0.10566 1
HepMC::Asciiv3-END_EVENT_LISTING
"""

SINGLE_ELECTRON = """E 1 0 1
U GEV MM
P 1 0 11 0 0 10 10.511 0.000511 1
"""

# Second event has a particle whose position does not match its sequence.
BAD_TRACK = """HepMC::Version 3.02.02
HepMC::Asciiv3-START_EVENT_LISTING
E 0 0 1
U GEV MM
P 1 0 13 0.5 0.2 1.0 1.1407 0.10566 1
E 1 0 2
U GEV MM
P 1 0 13 0.5 0.2 1.0 1.1407 0.10566 1
P 3 0 -211 -0.5 -0.2 -3.0 3.0498 0.13957 1
HepMC::Asciiv3-END_EVENT_LISTING
"""


def pytest_configure(config):  # noqa: D401
    """Ensure fixtures exist before any tests run."""
    _write_text(FIXTURES / "dimuon.hepmc", DIMUON)
    _write_text(FIXTURES / "single_electron.hepmc", SINGLE_ELECTRON)
    _write_text(FIXTURES / "bad_track.hepmc", BAD_TRACK)


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch) -> Path:
    """Temporary working directory holding a copy of every fixture."""
    for src in FIXTURES.glob("*.hepmc"):
        (tmp_path / src.name).write_text(src.read_text(encoding="utf-8"), encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path
