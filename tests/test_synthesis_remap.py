from __future__ import annotations

import pytest

from conftest import DIMUON
from upclhe.io.ughepmc import iter_ughepmc
from upclhe.models import PDG_PHOTON, STATUS_FINAL, STATUS_INCOMING, Particle
from upclhe.remap import parent_slots, remap_parents
from upclhe.synthesis import incoming_photons, total_final_momentum, with_incoming_photons


def _events():
    return list(iter_ughepmc(DIMUON.splitlines()))


def test_total_skips_decayed_particles():
    ev = _events()[0]
    # J/psi (status 2) is excluded, both muons are summed
    assert total_final_momentum(ev.particles) == pytest.approx((0.1, -0.05, 2.0, 2.8481))


def test_single_electron_photons():
    electron = Particle(pdg_id=11, status=STATUS_FINAL, px=0.0, py=0.0, pz=10.0, energy=10.511)
    a, b = incoming_photons([electron])

    assert (a.pdg_id, a.status, a.mother) == (PDG_PHOTON, STATUS_INCOMING, 0)
    assert (a.px, a.py) == (0.0, 0.0)
    assert a.pz == pytest.approx(10.2555)
    assert a.energy == pytest.approx(10.2555)

    assert (b.pdg_id, b.status, b.mother) == (PDG_PHOTON, STATUS_INCOMING, 0)
    assert b.pz == pytest.approx(-0.2555)
    assert b.energy == pytest.approx(0.2555)

    assert a.computed_mass == pytest.approx(0.0, abs=1e-9)
    assert b.computed_mass == pytest.approx(0.0, abs=1e-9)


@pytest.mark.parametrize("ev_index", [0, 1])
def test_photons_conserve_momentum_along_z(ev_index):
    ev = _events()[ev_index]
    a, b = incoming_photons(ev.particles)
    _, _, pz, e = total_final_momentum(ev.particles)
    assert a.pz + b.pz == pytest.approx(pz)
    assert a.energy + b.energy == pytest.approx(e)
    assert a.pz > 0 > b.pz


def test_with_incoming_photons_prepends_in_order():
    ev = _events()[0]
    full = with_incoming_photons(ev.particles)
    assert len(full) == len(ev.particles) + 2
    assert [p.status for p in full[:2]] == [STATUS_INCOMING, STATUS_INCOMING]
    assert full[0].pz > 0 and full[1].pz < 0
    assert full[2:] == ev.particles


def test_parent_slots():
    ev = _events()[0]
    full = with_incoming_photons(ev.particles)
    assert remap_parents(full) == [(0, 0), (0, 0), (1, 2), (3, 0), (3, 0)]


def test_parent_slots_deep_chain():
    p = Particle(pdg_id=16, status=STATUS_FINAL, px=0, py=0, pz=0, energy=1, mother=7)
    assert parent_slots(p) == (9, 0)


def test_empty_event_gives_null_photons():
    a, b = incoming_photons([])
    assert (a.pz, a.energy, b.pz, b.energy) == (0.0, 0.0, 0.0, 0.0)
