# config_reader.py
from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from alphabet import Alphabet
from debug import Debug
from errors import EnigmaError
from machine import Machine
from permutation import Permutation
from rotor_and_reflector import Rotor, fixed_rotor, moving_rotor, reflector

debug = Debug()

# ────────────────────────────────────────────────────────────────────────
#  0. Regex & trivial helpers
# ────────────────────────────────────────────────────────────────────────

_type_re = re.compile(r"^([MNR])(\S*)$")


def group(text: str, block: int = 5) -> str:
    """Drop spaces and rejoin *text* in space-separated blocks."""
    flat = text.replace(" ", "")
    return " ".join(flat[i : i + block] for i in range(0, len(flat), block))


# ────────────────────────────────────────────────────────────────────────
#  1. Machine configuration
# ────────────────────────────────────────────────────────────────────────


def _read_count(fields: list[str], i: int, missing: str) -> int:
    if len(fields) <= i or not fields[i].isascii():
        raise EnigmaError(missing)
    try:
        return int(fields[i])
    except ValueError:
        raise EnigmaError(missing) from None


def read_rotor(name: str, kind: str, perm: Permutation) -> Rotor:
    """Build one catalog rotor from its NAME, TYPE field and wiring."""
    m = _type_re.match(kind)
    if not m:
        raise EnigmaError(f"Rotor {name}: invalid type {kind!r}")
    letter, notches = m.groups()

    if letter == "M":
        return moving_rotor(name, perm, notches)
    if notches:
        raise EnigmaError(f"Rotor {name}: type {letter} takes no notches")
    if letter == "N":
        return fixed_rotor(name, perm)
    return reflector(name, perm)


def read_config(text: str) -> Machine:
    """Return a machine built from configuration *text*.

    Line 1 is the alphabet, line 2 ``numRotors numPawls``, and each further
    line ``NAME TYPE (CYCLES)...``.  A line starting with whitespace adds
    cycles to the rotor above it.
    """
    lines = text.splitlines()
    if not lines:
        raise EnigmaError("Shortened configuration file")

    alphabet = Alphabet(lines[0].strip())

    if len(lines) < 2:
        raise EnigmaError("No numRotors")
    counts = lines[1].split()
    num_rotors = _read_count(counts, 0, "No numRotors")
    num_pawls = _read_count(counts, 1, "No numPawls")
    if len(counts) > 2:
        raise EnigmaError(f"Unexpected text after rotor counts: {lines[1]!r}")
    if num_rotors <= num_pawls:
        raise EnigmaError("Insufficient rotors")

    # collect descriptor + continuation lines first, so reflector
    # wiring is complete before it is checked
    descs: list[tuple[str, str, Permutation]] = []
    for line in lines[2:]:
        if not line.strip():
            continue
        if line[0].isspace():
            if not descs:
                raise EnigmaError(f"Cycle line with no rotor above it: {line!r}")
            descs[-1][2].add_cycles(line)
            continue

        fields = line.split(None, 2)
        if len(fields) < 2:
            raise EnigmaError(f"Invalid rotor description: {line!r}")
        name, kind = fields[0], fields[1]
        cycles = fields[2] if len(fields) > 2 else ""
        if any(name.upper() == seen.upper() for seen, _, _ in descs):
            raise EnigmaError(f"Duplicate rotor {name}")
        descs.append((name, kind, Permutation(cycles, alphabet)))

    rotors = [read_rotor(name, kind, perm) for name, kind, perm in descs]
    debug.log("config", f"{len(rotors)} rotors: {[r.name for r in rotors]}")
    return Machine(alphabet, num_rotors, num_pawls, rotors)


# ────────────────────────────────────────────────────────────────────────
#  2. Message stream
# ────────────────────────────────────────────────────────────────────────


def setup(machine: Machine, line: str) -> None:
    """Apply a ``* ROTORS... SETTINGS [PLUGBOARD]`` line to *machine*."""
    fields = line.lstrip("*").split()
    n = machine.num_rotors()
    if len(fields) < n + 1:
        raise EnigmaError(f"Setup line too short: {line!r}")

    names, setting = fields[:n], fields[n]
    plugs = " ".join(fields[n + 1 :])

    machine.insert_rotors(names)
    machine.set_rotors(setting)
    machine.set_plugboard(Permutation(plugs, machine.alphabet))
    debug.log("config", f"setup {names} {setting} plugs={plugs or '-'}")


def process(machine: Machine, lines: Iterable[str], block: int = 5) -> Iterator[str]:
    """Yield one grouped output line per message line in *lines*."""
    configured = False
    for line in lines:
        line = line.rstrip("\r\n")
        if line.startswith("*"):
            setup(machine, line)
            configured = True
            continue
        if not configured:
            raise EnigmaError("Message can't be converted: no setup line yet")
        yield group(machine.convert(line), block)
