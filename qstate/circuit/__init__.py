"""Circuit history and simulation sessions."""

from .log import CircuitLog, CircuitLogEntry, GateEntry, MeasurementEntry
from .session import Simulation

__all__ = [
    "CircuitLog",
    "CircuitLogEntry",
    "GateEntry",
    "MeasurementEntry",
    "Simulation",
]
