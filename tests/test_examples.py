"""Smoke tests for example scripts.

These tests ensure that the example scripts run their main execution paths
without raising exceptions.
"""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

# Determine the repo root
ROOT = Path(__file__).resolve().parents[1]


def test_deutsch_jozsa_walkthrough_runs() -> None:
    """Test that examples/deutsch_jozsa_walkthrough.py runs successfully."""
    script = ROOT / "examples" / "deutsch_jozsa_walkthrough.py"
    assert script.exists(), f"Example script not found: {script}"

    result = subprocess.run(
        [sys.executable, str(script)],
        capture_output=True,
        text=True,
        check=False,
        timeout=60,
        encoding="utf-8",
        env={**os.environ, "PYTHONIOENCODING": "utf-8"},
    )

    assert result.returncode == 0, (
        f"Example script failed with return code {result.returncode}.\n"
        f"STDOUT:\n{result.stdout}\n"
        f"STDERR:\n{result.stderr}"
    )
    assert "Measured query qubit: 1" in result.stdout
    assert "Measured query qubit: 0" in result.stdout
    assert "n=3 balanced   -> balanced (1, 1, 1)" in result.stdout
    assert "Deutsch-Jozsa walkthrough complete" in result.stdout
