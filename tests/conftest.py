"""Shared pytest setup: repo root import path and scripted console input."""

from __future__ import annotations

import builtins
import sys
from pathlib import Path

import pytest


def _insert_repo_root() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_insert_repo_root()


H2O_XYZ = """3
water
O  0.000000  0.000000  0.117300
H  0.000000  0.757200 -0.469200
H  0.000000 -0.757200 -0.469200
"""

SABC_TEXT = """# water isotopologues, MHz
[original]
835840.3 435351.7 278138.7
[substituted]
1 830000.0 430000.0 275000.0
2,3 800000.0 420000.0 270000.0
"""


@pytest.fixture
def scripted_input(monkeypatch: pytest.MonkeyPatch):
    """Replace ``input`` with a fixed list of answers.

    The returned list collects the prompts shown. Running out of answers
    behaves like a closed standard input (EOFError).
    """

    prompts: list[str] = []

    def install(*answers: str) -> list[str]:
        remaining = iter(answers)

        def fake_input(prompt: str = "") -> str:
            prompts.append(prompt)
            try:
                return next(remaining)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr(builtins, "input", fake_input)
        return prompts

    return install


@pytest.fixture
def water_xyz(tmp_path: Path) -> Path:
    path = tmp_path / "water.xyz"
    path.write_text(H2O_XYZ)
    return path


@pytest.fixture
def water_sabc(tmp_path: Path) -> Path:
    path = tmp_path / "water.sabc"
    path.write_text(SABC_TEXT)
    return path
