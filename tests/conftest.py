# tests/conftest.py
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# project root = one level above tests/
ROOT = Path(__file__).resolve().parents[1]

# make the flat top-level modules (alphabet, machine, ...) importable
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from config_reader import read_config  # noqa: E402
from debug import Debug  # noqa: E402

ALPHA26 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

ENIGMA_I_CONFIG = f"""{ALPHA26}
4 3
I MQ      (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
II ME     (FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)
III MV    (ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)
B R       (AY) (BR) (CU) (DH) (EQ) (FS) (GL)
          (IP) (JX) (KN) (MO) (TZ) (VW)
"""

SMALL_CONFIG = """ABCD
3 0
R R (AB)(CD)
F1 N
F2 N
"""


@pytest.fixture
def enigma_i():
    """A three-rotor machine (reflector B, rotors I II III) set to AAA."""
    m = read_config(ENIGMA_I_CONFIG)
    m.insert_rotors(["B", "I", "II", "III"])
    m.set_rotors("AAA")
    return m


@pytest.fixture
def debug_switches():
    """Restore the shared debug switches after a test flips them."""
    dbg = Debug()
    saved = dbg.status()
    yield dbg
    for comp, on in saved.items():
        (dbg.enable if on else dbg.disable)(comp)


@pytest.fixture
def enigma_i_config() -> str:
    return ENIGMA_I_CONFIG


@pytest.fixture
def small_config() -> str:
    return SMALL_CONFIG
