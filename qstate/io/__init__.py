"""Export of circuit logs to external formats."""

from .qasm2 import export_qasm, write_qasm

__all__ = ["export_qasm", "write_qasm"]
