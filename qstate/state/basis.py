"""Bit convention between qubit labels and amplitude-vector positions.

Qubits are numbered from 1. Qubit 1 is the least-significant bit of the
amplitude index and qubit ``nbits`` the most significant, so the basis state
with qubit ``q`` set and every other qubit clear sits at index ``2**(q-1)``.
Gate application, measurement, printing, rendering and export all index
through these helpers.
"""

from __future__ import annotations

from typing import Mapping, Sequence, Tuple, Union

from qstate.errors import QubitIndexError

BitAssignment = Union[Mapping[int, int], Sequence[int]]


def _check_bit(qubit: int, value: int) -> int:
    if value not in (0, 1):
        raise ValueError(f"Bit value for qubit {qubit} must be 0 or 1, got {value!r}.")
    return int(value)


def index_of(bits: BitAssignment) -> int:
    """
    Return the amplitude index for a bit assignment.

    Parameters
    ----------
    bits:
        Either a mapping ``{qubit: bit}`` with 1-based qubit labels, or a
        sequence ``[b_1, b_2, ...]`` listing qubit 1 first. Qubits missing
        from a mapping count as 0.

    Returns
    -------
    int
        ``sum(bit(q) * 2**(q-1))``.
    """
    if isinstance(bits, Mapping):
        items = bits.items()
    else:
        items = enumerate(bits, start=1)

    index = 0
    for qubit, value in items:
        if qubit < 1:
            raise QubitIndexError(f"Qubit labels start at 1, got {qubit}.")
        index |= _check_bit(qubit, value) << (qubit - 1)
    return index


def bit_of(index: int, qubit: int) -> int:
    """Return the value of ``qubit`` in basis ``index``."""
    if qubit < 1:
        raise QubitIndexError(f"Qubit labels start at 1, got {qubit}.")
    return (index >> (qubit - 1)) & 1


def bits_of(index: int, nbits: int) -> Tuple[int, ...]:
    """Return ``(bit(1), bit(2), ..., bit(nbits))`` for basis ``index``."""
    if index < 0 or index >= 1 << nbits:
        raise ValueError(f"Index {index} out of range for {nbits} qubits.")
    return tuple((index >> (q - 1)) & 1 for q in range(1, nbits + 1))


def basis_label(index: int, nbits: int) -> str:
    """Return the ket label of ``index`` with qubit ``nbits`` written first."""
    return "".join(str(b) for b in reversed(bits_of(index, nbits)))


def qubit_mask(qubit: int) -> int:
    """Return the integer with only ``qubit``'s bit set."""
    return 1 << (qubit - 1)


__all__ = [
    "BitAssignment",
    "index_of",
    "bit_of",
    "bits_of",
    "basis_label",
    "qubit_mask",
]
