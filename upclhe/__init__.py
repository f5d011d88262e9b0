"""upclhe: UPCgen HepMC event listing to Les Houches Event converter."""

from __future__ import annotations

__version__ = "0.1.0"

from .convert import convert, default_output_path
from .errors import FormatError, ResourceError, UsageError
from .models import Event, Particle, RunInfo
from .validation import validate_file

__all__ = [
    "__version__",
    "convert",
    "default_output_path",
    "validate_file",
    "Event",
    "Particle",
    "RunInfo",
    "FormatError",
    "ResourceError",
    "UsageError",
]
