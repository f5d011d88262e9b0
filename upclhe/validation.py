"""
Physics validation for converted LHE events.

Provides checks for:
- Momentum conservation between incoming and final-state particles
- Valid PDG particle IDs
- Energy positivity
- Particle count against the event header
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from . import pdg as pdg_module
from .io.lhe import iter_lhe
from .models import Event


@dataclass
class ValidationIssue:
    """A single validation issue found in an event."""

    level: str  # "error", "warning"
    event_number: int
    particle_index: Optional[int]  # None for event-level issues
    message: str

    def __str__(self) -> str:
        loc = f"event {self.event_number}"
        if self.particle_index is not None:
            loc += f", particle {self.particle_index}"
        return f"[{self.level.upper()}] {loc}: {self.message}"


@dataclass
class ValidationReport:
    """Summary of all validation issues."""

    issues: list[ValidationIssue] = field(default_factory=list)
    n_events: int = 0

    @property
    def n_errors(self) -> int:
        return sum(1 for i in self.issues if i.level == "error")

    @property
    def n_warnings(self) -> int:
        return sum(1 for i in self.issues if i.level == "warning")

    @property
    def is_valid(self) -> bool:
        return self.n_errors == 0

    def __str__(self) -> str:
        lines = [
            f"Validation of {self.n_events} events: {self.n_errors} errors, "
            f"{self.n_warnings} warnings"
        ]
        for issue in self.issues[:50]:  # Cap output
            lines.append(f"  {issue}")
        if len(self.issues) > 50:
            lines.append(f"  ... and {len(self.issues) - 50} more")
        return "\n".join(lines)


def validate_event(
    event: Event,
    *,
    check_momentum: bool = True,
    check_pdg: bool = True,
    check_energy: bool = True,
    momentum_tolerance: float = 1e-4,
) -> list[ValidationIssue]:
    """Validate a single event.

    Args:
        event: The event to validate.
        check_momentum: Check 4-momentum conservation.
        check_pdg: Check PDG ID validity.
        check_energy: Check energy positivity.
        momentum_tolerance: Relative tolerance for momentum conservation.

    Returns:
        List of validation issues found.
    """
    issues: list[ValidationIssue] = []
    evt = event.event_number

    if event.n_particles and event.n_particles != len(event.particles):
        issues.append(ValidationIssue(
            "error", evt, None,
            f"Header declares {event.n_particles} particles, found {len(event.particles)}"
        ))

    if not event.particles:
        issues.append(ValidationIssue("warning", evt, None, "Event has no particles"))
        return issues

    if check_pdg:
        for i, p in enumerate(event.particles):
            if not pdg_module.is_valid_pdg_id(p.pdg_id):
                issues.append(ValidationIssue(
                    "warning", evt, i,
                    f"Unknown/invalid PDG ID: {p.pdg_id}"
                ))

    if check_energy:
        for i, p in enumerate(event.particles):
            if p.energy < 0:
                issues.append(ValidationIssue(
                    "error", evt, i,
                    f"Negative energy: {p.energy:.6e}"
                ))

    if check_momentum:
        incoming = event.incoming_particles
        outgoing = event.final_particles

        if incoming and outgoing:
            sum_in = [
                sum(p.px for p in incoming),
                sum(p.py for p in incoming),
                sum(p.pz for p in incoming),
                sum(p.energy for p in incoming),
            ]
            sum_out = [
                sum(p.px for p in outgoing),
                sum(p.py for p in outgoing),
                sum(p.pz for p in outgoing),
                sum(p.energy for p in outgoing),
            ]

            total_energy = max(abs(sum_in[3]), abs(sum_out[3]), 1e-10)
            labels = ["px", "py", "pz", "E"]

            for j in range(4):
                diff = abs(sum_in[j] - sum_out[j])
                if diff / total_energy > momentum_tolerance:
                    # incoming photons run along the beam axis, so net
                    # transverse momentum of the final state is not balanced
                    level = "warning" if j < 2 else "error"
                    issues.append(ValidationIssue(
                        level, evt, None,
                        f"Momentum non-conservation in {labels[j]}: "
                        f"in={sum_in[j]:.6e}, out={sum_out[j]:.6e}, "
                        f"diff={diff:.6e} ({diff/total_energy:.4e} relative)"
                    ))

    return issues


def validate(
    events: Iterable[Event],
    *,
    check_momentum: bool = True,
    check_pdg: bool = True,
    check_energy: bool = True,
    momentum_tolerance: float = 1e-4,
) -> ValidationReport:
    """Validate a stream of events that already carry their incoming particles."""
    report = ValidationReport()
    for event in events:
        report.n_events += 1
        report.issues.extend(validate_event(
            event,
            check_momentum=check_momentum,
            check_pdg=check_pdg,
            check_energy=check_energy,
            momentum_tolerance=momentum_tolerance,
        ))
    return report


def validate_file(path: Union[str, Path], **kwargs) -> ValidationReport:
    """Re-read a written LHE file and validate every event block."""
    return validate(iter_lhe(str(path)), **kwargs)
