"""Textbook algorithms built on the simulation engine."""

from .deutsch_jozsa import (
    DeutschJozsaResult,
    balanced_oracle,
    constant_oracle,
    oracle_from_function,
    query_qubits,
    run_deutsch_jozsa,
)

__all__ = [
    "DeutschJozsaResult",
    "balanced_oracle",
    "constant_oracle",
    "oracle_from_function",
    "query_qubits",
    "run_deutsch_jozsa",
]
