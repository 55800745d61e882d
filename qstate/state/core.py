"""Dense amplitude-vector representation of an n-qubit register."""

from __future__ import annotations

import math
from typing import Mapping, Optional, Union

import numpy as np
import torch

from qstate.config import get_config
from qstate.diagnostics.core import assert_normalized
from qstate.errors import DimensionError
from qstate.logging import get_logger

from .basis import BitAssignment, basis_label, index_of

logger = get_logger(__name__)

BasisSpec = Union[None, int, BitAssignment]

_SINGLE_PRECISION_ATOL = 1e-6


class QuantumState:
    """
    An ``nbits``-qubit pure state stored as ``2**nbits`` complex amplitudes.

    The amplitude at index ``i`` belongs to the basis state whose binary
    digits are the qubit values, qubit 1 being the least-significant bit.
    Gate application and measurement mutate :attr:`amplitudes` in place; the
    tensor object itself is never replaced.

    Instances are not thread-safe. Share one across threads only behind an
    external lock.
    """

    def __init__(self, nbits: int, amplitudes: torch.Tensor, check_norm: bool = True) -> None:
        """
        Wrap an existing amplitude tensor. Prefer :func:`new_state`.

        Unless ``check_norm`` is False the amplitudes must have total
        probability 1 within the configured tolerance (at least ``1e-6`` for
        single-precision tensors); otherwise a ``ValueError`` is raised.
        """
        _check_nbits(nbits)
        if amplitudes.dim() != 1 or amplitudes.shape[0] != 1 << nbits:
            raise DimensionError(
                f"amplitudes must have shape ({1 << nbits},) for {nbits} qubits, "
                f"got {tuple(amplitudes.shape)}"
            )
        if not torch.is_complex(amplitudes):
            raise DimensionError(f"amplitudes must be complex, got {amplitudes.dtype}")
        if check_norm:
            atol = get_config().atol
            if amplitudes.dtype == torch.complex64:
                atol = max(atol, _SINGLE_PRECISION_ATOL)
            assert_normalized(amplitudes, atol)
        self._nbits = int(nbits)
        self._amplitudes = amplitudes

    @property
    def nbits(self) -> int:
        """Number of qubits."""
        return self._nbits

    @property
    def amplitudes(self) -> torch.Tensor:
        """The underlying amplitude tensor, shared rather than copied."""
        return self._amplitudes

    @property
    def dim(self) -> int:
        return self._amplitudes.shape[0]

    def __len__(self) -> int:
        return self.dim

    def probabilities(self) -> torch.Tensor:
        """Return ``|a_i|**2`` for every basis index as a real tensor."""
        return self._amplitudes.abs() ** 2

    def norm(self) -> float:
        return float(torch.sqrt(self.probabilities().sum()))

    def copy(self) -> "QuantumState":
        """Return an independent state with the same amplitudes."""
        return QuantumState(self._nbits, self._amplitudes.clone(), check_norm=False)

    def to_numpy(self) -> np.ndarray:
        return self._amplitudes.detach().cpu().numpy()

    def __repr__(self) -> str:
        return f"QuantumState(nbits={self._nbits}, dtype={self._amplitudes.dtype})"

    def __str__(self) -> str:
        """
        Render the non-zero amplitudes as a sum of kets.

        Each term reads ``( a ) * |b_n...b_1>``; zero amplitudes (within the
        configured tolerance) are omitted.
        """
        atol = get_config().atol
        terms = []
        for index, amp in enumerate(self._amplitudes.tolist()):
            if abs(amp) <= atol:
                continue
            terms.append(f"( {_format_amplitude(amp)} )\t* |{basis_label(index, self._nbits)}>")
        if not terms:
            return "0"
        return "\n+ ".join(terms)


def _format_amplitude(amp: complex, digits: int = 4) -> str:
    re, im = round(amp.real, digits), round(amp.imag, digits)
    if im == 0.0:
        return f"{re:g}"
    if re == 0.0:
        return f"{im:g}i"
    sign = "+" if im > 0 else "-"
    return f"{re:g}{sign}{abs(im):g}i"


def _check_nbits(nbits: int) -> None:
    if not isinstance(nbits, (int, np.integer)) or isinstance(nbits, bool):
        raise DimensionError(f"nbits must be an integer, got {type(nbits).__name__}")
    if nbits <= 0:
        raise DimensionError(f"nbits must be >= 1, got {nbits}")
    max_qubits = get_config().max_qubits
    if nbits > max_qubits:
        raise DimensionError(
            f"nbits={nbits} exceeds the configured ceiling of {max_qubits} qubits "
            f"({1 << nbits} amplitudes)"
        )


def _resolve(
    dtype: Optional[torch.dtype],
    device: Union[torch.device, str, None],
) -> tuple[torch.dtype, torch.device]:
    if dtype is None:
        dtype = get_config().dtype
    if not dtype.is_complex:
        raise DimensionError(f"dtype must be complex, got {dtype}")
    return dtype, torch.device(device or "cpu")


def new_state(
    nbits: int,
    basis: BasisSpec = None,
    dtype: Optional[torch.dtype] = None,
    device: Union[torch.device, str, None] = None,
) -> QuantumState:
    """
    Create a computational basis state.

    Args:
        nbits: Number of qubits. Must be >= 1 and within the configured
            ceiling.
        basis: ``None`` for ``|0...0>``, an integer basis index, a sequence
            of bits listing qubit 1 first, or a mapping ``{qubit: bit}``.
        dtype: Complex dtype; defaults to the configured dtype.
        device: Torch device; defaults to CPU.

    Returns:
        A state with amplitude 1 at the chosen basis index, 0 elsewhere.

    Raises:
        DimensionError: If ``nbits <= 0``, a bit sequence is longer than
            ``nbits``, or the basis index does not fit in ``nbits`` qubits.
    """
    _check_nbits(nbits)
    dtype, dev = _resolve(dtype, device)

    if basis is None:
        index = 0
    elif isinstance(basis, (int, np.integer)) and not isinstance(basis, bool):
        index = int(basis)
    else:
        if not isinstance(basis, Mapping) and len(basis) > nbits:
            raise DimensionError(
                f"basis lists {len(basis)} bits but the register has {nbits} qubits"
            )
        index = index_of(basis)

    dim = 1 << nbits
    if index < 0 or index >= dim:
        raise DimensionError(
            f"basis index {index} out of range for {nbits} qubits [0, {dim})"
        )

    amplitudes = torch.zeros(dim, dtype=dtype, device=dev)
    amplitudes[index] = 1.0 + 0.0j
    logger.debug("new_state nbits=%d basis=%s", nbits, basis_label(index, nbits))
    return QuantumState(nbits, amplitudes, check_norm=False)


def uniform_state(
    nbits: int,
    dtype: Optional[torch.dtype] = None,
    device: Union[torch.device, str, None] = None,
) -> QuantumState:
    """Create the equal superposition of all ``2**nbits`` basis states."""
    _check_nbits(nbits)
    dtype, dev = _resolve(dtype, device)
    dim = 1 << nbits
    amplitudes = torch.full((dim,), 1.0 / math.sqrt(dim), dtype=dtype, device=dev)
    return QuantumState(nbits, amplitudes, check_norm=False)


__all__ = ["QuantumState", "new_state", "uniform_state"]
