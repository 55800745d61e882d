"""Tests for circuit drawer visualization."""

import math

import pytest

from qstate import gates
from qstate.circuit import CircuitLog
from qstate.viz.drawer import _compute_layers, _format_angle, print_circuit, to_text


def _log(*ops) -> CircuitLog:
    log = CircuitLog()
    for op in ops:
        log.append_gate(op)
    return log


def test_format_angle():
    """Test angle formatting for common values."""
    assert _format_angle(0) == "0"
    assert _format_angle(math.pi / 4) == "π/4"
    assert _format_angle(math.pi / 2) == "π/2"
    assert _format_angle(math.pi) == "π"
    assert _format_angle(-math.pi / 4) == "-π/4"
    assert _format_angle(-math.pi) == "-π"
    assert _format_angle(2 * math.pi) == "2π"
    assert _format_angle(0.123) == "0.123"


def test_empty_circuit():
    """Test drawing an empty circuit."""
    lines = to_text(CircuitLog(), 3).split("\n")
    assert lines == ["q1:", "q2:", "q3:"]


def test_hadamard_then_cnot():
    text = to_text(_log(gates.H(1), gates.CNOT(1, 2)), 2)
    assert text.split("\n") == [
        "q1: ─[H]───●──",
        "q2: ───────⊕──",
    ]


def test_ascii_mode():
    text = to_text(_log(gates.H(1), gates.CNOT(1, 2)), 2, use_ascii=True)
    assert text.split("\n") == [
        "q1: -[H]---*--",
        "q2: ------[X]-",
    ]
    assert all(ord(ch) < 128 for ch in text)


def test_parallel_gates_share_a_column():
    log = _log(gates.H(1), gates.X(2), gates.H(3))
    assert _compute_layers(log) == [[0, 1, 2]]


def test_controlled_span_blocks_inner_wires():
    log = _log(gates.CNOT(3, 1), gates.H(2))
    assert _compute_layers(log) == [[0], [1]]
    lines = to_text(log, 3).split("\n")
    assert "┼" in lines[1]
    assert "⊕" in lines[0]
    assert "●" in lines[2]


def test_lines_have_equal_width():
    log = _log(gates.rx(1, math.pi / 2), gates.toffoli(1, 2, 3), gates.swap(2, 3))
    log.append_measurement(1, 0)
    lines = to_text(log, 3).split("\n")
    assert len({len(line) for line in lines}) == 1
    assert "[RX(π/2)]" in lines[0]
    assert "[M=0]" in lines[0]
    assert "[SWAP]" in lines[1] and "[SWAP]" in lines[2]


def test_long_circuit_is_paginated():
    log = _log(*(gates.H(1) for _ in range(30)))
    text = to_text(log, 1, max_width=40)
    assert "-- continuing --" in text
    assert all(len(line) <= 40 for line in text.split("\n"))


def test_too_few_wires():
    with pytest.raises(ValueError, match="qubit 3"):
        to_text(_log(gates.H(3)), 2)


def test_print_circuit(capsys):
    print_circuit(_log(gates.H(1)), 1)
    captured = capsys.readouterr()
    assert "[H]" in captured.out
