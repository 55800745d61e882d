"""Deutsch-Jozsa walkthrough: one query decides constant versus balanced.

This example prepares |x=0, y=1> with the query bit x on qubit 2 and the
answer bit y on qubit 1, runs the balanced (CNOT) and constant (X) oracles,
prints the intermediate states, draws each circuit, and exports the balanced
one to OpenQASM 2.0.
"""

from __future__ import annotations

from qstate import Simulation, gates
from qstate.algorithms import balanced_oracle, constant_oracle, run_deutsch_jozsa


def walkthrough(name: str, oracle: gates.Gate) -> Simulation:
    """Run the single-input circuit step by step and print each state."""
    sim = Simulation(2, basis={1: 1}, seed=0)
    print(f"\n=== {name} oracle ===")
    print(f"Initial state:\n{sim}")

    sim.apply(gates.H(1), gates.H(2))
    print(f"After H on both qubits:\n{sim}")

    sim.apply(oracle)
    print(f"After the oracle:\n{sim}")

    sim.apply(gates.H(2))
    p0, p1 = sim.probabilities().reshape(2, 2).sum(dim=1).tolist()
    print(f"P(query=0) = {p0:.3f}, P(query=1) = {p1:.3f}")

    result = sim.measure(2)
    print(f"Measured query qubit: {result.outcome}")
    print(sim.to_text())
    return sim


def main() -> None:
    """Walk through both oracles, then run the multi-input helper."""
    balanced = walkthrough("Balanced", gates.CNOT(2, 1))
    walkthrough("Constant", gates.X(1))

    print("\nOpenQASM 2.0 (balanced, with measurement):")
    print(balanced.to_qasm(measure=True))

    for n_inputs in (1, 3):
        for label, oracle in (
            ("constant 0", constant_oracle(0)),
            ("constant 1", constant_oracle(1)),
            ("balanced", balanced_oracle()),
        ):
            result = run_deutsch_jozsa(oracle, n_inputs=n_inputs)
            print(f"n={n_inputs} {label:<10} -> {result.verdict} {result.outcomes}")

    print("\nDeutsch-Jozsa walkthrough complete")


if __name__ == "__main__":
    main()
