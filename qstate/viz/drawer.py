"""ASCII/text circuit drawer for circuit logs.

Deterministic, dependency-free rendering with box-drawing characters (or
plain ASCII). Wires are drawn top to bottom as ``q1 .. qn``, qubit 1 being
the least significant bit of the register.
"""

from __future__ import annotations

import math
import sys
from typing import IO, Dict, List, Optional

from qstate.circuit.log import CircuitLog, CircuitLogEntry
from qstate.gates.core import GateKind


def _format_angle(theta: float, atol: float = 1e-8) -> str:
    """
    Format an angle in radians as a readable string.

    Exact multiples of π/4 are written as π fractions (π/2, 3π/4, ...);
    anything else falls back to three decimal places.
    """
    k = round(theta / (math.pi / 4.0))
    if not math.isclose(theta, k * (math.pi / 4.0), abs_tol=atol):
        return f"{theta:.3f}"
    named = {
        0: "0",
        1: "π/4",
        2: "π/2",
        3: "3π/4",
        4: "π",
        -1: "-π/4",
        -2: "-π/2",
        -3: "-3π/4",
        -4: "-π",
    }
    if k in named:
        return named[k]
    if k % 4 == 0:
        return f"{k // 4}π"
    if k % 2 == 0:
        return f"{k // 2}π/2"
    return f"{k}π/4"


def _span(entry: CircuitLogEntry) -> range:
    return range(min(entry.qubits), max(entry.qubits) + 1)


def _compute_layers(log: CircuitLog) -> List[List[int]]:
    """
    Group entry indices into columns that can be drawn side by side.

    An entry occupies every wire between its lowest and highest qubit, so a
    controlled gate's connector never crosses another entry in its column.
    Order on each wire is preserved.
    """
    layers: List[List[int]] = []
    next_free: Dict[int, int] = {}

    for idx, entry in enumerate(log):
        wires = _span(entry)
        layer = max((next_free.get(q, 0) for q in wires), default=0)
        while len(layers) <= layer:
            layers.append([])
        layers[layer].append(idx)
        for q in wires:
            next_free[q] = layer + 1

    return layers


def _render_label(entry: CircuitLogEntry) -> str:
    if entry.kind is GateKind.MEASUREMENT:
        return f"M={entry.outcome}"
    name = entry.name.upper()
    if entry.params:
        return f"{name}({','.join(_format_angle(p) for p in entry.params)})"
    return name


def _render_column(
    log: CircuitLog,
    indices: List[int],
    nbits: int,
    use_ascii: bool,
) -> List[str]:
    """Render one layer as a list of equal-width wire segments."""
    wire = "-" if use_ascii else "─"
    cross = "+" if use_ascii else "┼"
    control = "*" if use_ascii else "●"
    segments: List[str] = [""] * nbits

    for idx in indices:
        entry = log[idx]
        for q in _span(entry):
            if q not in entry.qubits:
                segments[q - 1] = cross
        for q in entry.controls:
            segments[q - 1] = control
        if entry.kind is GateKind.CONTROLLED_NOT:
            segments[entry.targets[0] - 1] = "[X]" if use_ascii else "⊕"
            continue
        label = _render_label(entry)
        for q in entry.targets:
            segments[q - 1] = f"[{label}]"

    width = max(3, max(len(s) for s in segments))
    out = []
    for s in segments:
        if not s:
            out.append(wire * (width + 2))
            continue
        pad = width - len(s)
        left = pad // 2
        out.append(wire * (left + 1) + s + wire * (pad - left + 1))
    return out


def to_text(
    log: CircuitLog,
    nbits: int,
    max_width: int = 80,
    use_ascii: bool = False,
) -> str:
    """
    Convert a circuit log to a multi-line text diagram.

    Parameters
    ----------
    log:
        Entries to draw.
    nbits:
        Number of wires to draw; must cover every qubit in the log.
    max_width:
        Maximum line width in characters. Wider circuits are split into
        pages separated by ``-- continuing --``.
    use_ascii:
        If True, use only ASCII characters.

    Returns
    -------
    str
        One line per qubit (per page), ``q1`` first.
    """
    if log.max_qubit() > nbits:
        raise ValueError(
            f"log references qubit {log.max_qubit()} but only {nbits} wires are drawn"
        )
    prefix_width = len(f"q{nbits}: ")
    prefixes = [f"q{q}: ".ljust(prefix_width) for q in range(1, nbits + 1)]

    layers = _compute_layers(log)
    if not layers:
        return "\n".join(p.rstrip() for p in prefixes)

    columns = [_render_column(log, layer, nbits, use_ascii) for layer in layers]

    pages: List[List[List[str]]] = [[]]
    used = prefix_width
    for column in columns:
        width = len(column[0])
        if pages[-1] and used + width > max_width:
            pages.append([])
            used = prefix_width
        pages[-1].append(column)
        used += width

    lines: List[str] = []
    for page_no, page in enumerate(pages):
        if page_no:
            lines.append("-- continuing --")
        for q in range(nbits):
            lines.append(prefixes[q] + "".join(col[q] for col in page))
    return "\n".join(lines)


def print_circuit(
    log: CircuitLog,
    nbits: int,
    file: Optional[IO[str]] = None,
    max_width: int = 80,
    use_ascii: bool = False,
) -> None:
    """Print a circuit diagram to stdout or a file."""
    if file is None:
        file = sys.stdout
    print(to_text(log, nbits, max_width=max_width, use_ascii=use_ascii), file=file)


__all__ = ["to_text", "print_circuit"]
