"""qstate - a PyTorch-native state-vector engine for small quantum circuits."""

__version__ = "0.1.0"

# Algorithms
from . import gates
from .algorithms import (
    DeutschJozsaResult,
    balanced_oracle,
    constant_oracle,
    oracle_from_function,
    run_deutsch_jozsa,
)

# Engines
from .backend import MeasurementResult, apply, marginal_probabilities, measure, sample_counts

# Circuit log and sessions
from .circuit import CircuitLog, GateEntry, MeasurementEntry, Simulation

# Configuration
from .config import EngineConfig, config_context, get_config, set_config

# Diagnostics
from .diagnostics import (
    assert_normalized,
    debug_context,
    fidelity,
    is_debug_enabled,
    set_debug_enabled,
    state_norm,
)

# Errors
from .errors import (
    DegenerateStateError,
    DimensionError,
    ExportError,
    InvalidMatrixError,
    OverlapError,
    QStateError,
    QubitIndexError,
)

# Gates
from .gates import (
    CCNOT,
    CNOT,
    SWAP,
    ControlledGate,
    Gate,
    GateKind,
    H,
    S,
    SingleQubitGate,
    T,
    UnitaryGate,
    X,
    Y,
    Z,
    is_unitary,
)

# Export
from .io import export_qasm, write_qasm

# Logging
from .logging import configure_logging, get_logger, set_log_level

# States
from .state import QuantumState, new_state, uniform_state

# Rendering
from .viz import print_circuit, to_text

__all__ = [
    # Version
    "__version__",
    # States
    "QuantumState",
    "new_state",
    "uniform_state",
    # Gates
    "gates",
    "Gate",
    "GateKind",
    "SingleQubitGate",
    "ControlledGate",
    "UnitaryGate",
    "is_unitary",
    "X",
    "Y",
    "Z",
    "H",
    "S",
    "T",
    "CNOT",
    "CCNOT",
    "SWAP",
    # Engines
    "apply",
    "measure",
    "marginal_probabilities",
    "sample_counts",
    "MeasurementResult",
    # Circuit log and sessions
    "CircuitLog",
    "GateEntry",
    "MeasurementEntry",
    "Simulation",
    # Errors
    "QStateError",
    "DimensionError",
    "QubitIndexError",
    "OverlapError",
    "InvalidMatrixError",
    "DegenerateStateError",
    "ExportError",
    # Configuration
    "EngineConfig",
    "get_config",
    "set_config",
    "config_context",
    # Diagnostics
    "state_norm",
    "assert_normalized",
    "fidelity",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
    # Export and rendering
    "export_qasm",
    "write_qasm",
    "to_text",
    "print_circuit",
    # Algorithms
    "DeutschJozsaResult",
    "constant_oracle",
    "balanced_oracle",
    "oracle_from_function",
    "run_deutsch_jozsa",
]
