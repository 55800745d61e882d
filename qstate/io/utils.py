"""Formatting helpers shared by exporters."""

from __future__ import annotations

import math


def float_to_angle_str(angle: float, tol: float = 1e-10) -> str:
    """
    Convert a float angle (in radians) to a readable QASM-compatible expression.

    If the angle is a rational multiple of π with small denominator (q ≤ 12),
    returns a simplified expression like "pi/2" or "(3/4*pi)". Otherwise,
    returns a decimal string with 12 digits of precision.

    Parameters
    ----------
    angle : float
        Angle in radians.
    tol : float
        Tolerance for detecting rational multiples of π.

    Returns
    -------
    str
        QASM-compatible angle expression.
    """
    if abs(angle) < tol:
        return "0"

    pi_multiple = angle / math.pi
    for q in range(1, 13):
        p_float = pi_multiple * q
        p_int = round(p_float)
        if abs(p_float - p_int) < tol:
            gcd_val = math.gcd(abs(p_int), q)
            p, q_s = p_int // gcd_val, q // gcd_val
            if q_s == 1:
                if p == 1:
                    return "pi"
                if p == -1:
                    return "-pi"
                return f"{p}*pi"
            if p == 1:
                return f"pi/{q_s}"
            if p == -1:
                return f"-pi/{q_s}"
            return f"({p}/{q_s}*pi)"

    if abs(angle) < 1e-4 or abs(angle) > 1e4:
        return f"{angle:.12e}"
    return f"{angle:.12f}".rstrip("0").rstrip(".")


def qasm_qubit(qubit: int, register: str = "q") -> str:
    """Translate a 1-based engine qubit label to a 0-based QASM reference."""
    return f"{register}[{qubit - 1}]"


__all__ = ["float_to_angle_str", "qasm_qubit"]
