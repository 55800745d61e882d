"""Exception types raised by the qstate engine.

Each error also derives from the builtin exception a caller would naturally
catch for that failure, so ``except ValueError`` keeps working.
"""

from __future__ import annotations


class QStateError(Exception):
    """Base class for all qstate errors."""


class DimensionError(QStateError, ValueError):
    """Invalid qubit count or basis index at state construction."""


class QubitIndexError(QStateError, IndexError):
    """Reference to a qubit that does not exist in the register."""


class OverlapError(QStateError, ValueError):
    """A qubit is used twice by one gate, e.g. as both target and control."""


class InvalidMatrixError(QStateError, ValueError):
    """Gate matrix is not square, has the wrong dimension, or is not unitary."""


class DegenerateStateError(QStateError, ArithmeticError):
    """Measurement outcome probability is numerically zero."""


class ExportError(QStateError, ValueError):
    """A circuit log entry has no representation in the export format."""


__all__ = [
    "QStateError",
    "DimensionError",
    "QubitIndexError",
    "OverlapError",
    "InvalidMatrixError",
    "DegenerateStateError",
    "ExportError",
]
