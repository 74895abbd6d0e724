# rotor_and_reflector.py
from __future__ import annotations

from enum import Enum

from debug import Debug
from errors import EnigmaError
from permutation import Permutation

debug = Debug()
debug.disable("rotor")


class RotorKind(Enum):
    MOVING = "M"
    FIXED = "N"
    REFLECTOR = "R"


class Rotor:
    """One wheel: a wiring permutation seen through a rotational offset.

    A single class covers all three kinds; ``kind`` decides whether the
    rotor advances, reflects and can report a notch.
    """

    def __init__(
        self,
        name: str,
        perm: Permutation,
        kind: RotorKind = RotorKind.FIXED,
        notches: str = "",
    ) -> None:
        if kind is not RotorKind.MOVING and notches:
            raise EnigmaError(f"Rotor {name}: only moving rotors have notches")
        bad = [ch for ch in notches if not perm.alphabet.contains(ch)]
        if bad:
            raise EnigmaError(f"Rotor {name}: notch {bad[0]!r} not in alphabet")

        self.name = name
        self.permutation = perm
        self.alphabet = perm.alphabet
        self.size = perm.size()
        self.kind = kind
        self.notches = set(notches)
        self.setting = 0

    # ── capabilities ──────────────────────────────────────────────
    def rotates(self) -> bool:
        return self.kind is RotorKind.MOVING

    def reflecting(self) -> bool:
        return self.kind is RotorKind.REFLECTOR

    # ── position ──────────────────────────────────────────────────
    def set(self, posn: int | str) -> None:
        """Move straight to *posn* (an index or a symbol)."""
        if isinstance(posn, str):
            posn = self.alphabet.to_int(posn)
        elif not (0 <= posn < self.size):
            raise EnigmaError(f"Rotor {self.name}: setting {posn} out of range")
        if self.reflecting() and posn != 0:
            raise EnigmaError(f"Reflector {self.name} has only one position")
        self.setting = posn

    def at_notch(self) -> bool:
        return self.rotates() and self.alphabet.to_char(self.setting) in self.notches

    def advance(self) -> None:
        if not self.rotates():
            return
        self.setting = (self.setting + 1) % self.size
        debug.log("stepping", f"{self.name} -> {self.alphabet.to_char(self.setting)}")

    # ── signal paths ─────────────────────────────────────────────
    def convert_forward(self, p: int) -> int:
        shift = self.permutation.wrap(p + self.setting)
        mapped = self.permutation.permute(shift)
        result = self.permutation.wrap(mapped - self.setting)
        debug.log("rotor", f"{self.name} fwd {p} -> {result}")
        return result

    def convert_backward(self, e: int) -> int:
        shift = self.permutation.wrap(e + self.setting)
        mapped = self.permutation.invert(shift)
        result = self.permutation.wrap(mapped - self.setting)
        debug.log("rotor", f"{self.name} bwd {e} -> {result}")
        return result

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        return f"<Rotor {self.name} {self.kind.name} pos={self.setting}>"


# ── constructors, one per kind ──────────────────────────────────────

def moving_rotor(name: str, perm: Permutation, notches: str) -> Rotor:
    if not notches:
        raise EnigmaError(f"Moving rotor {name} needs at least one notch")
    return Rotor(name, perm, RotorKind.MOVING, notches)


def fixed_rotor(name: str, perm: Permutation) -> Rotor:
    return Rotor(name, perm, RotorKind.FIXED)


def reflector(name: str, perm: Permutation) -> Rotor:
    """A reflector; its wiring must be a derangement."""
    if not perm.derangement():
        raise EnigmaError(f"Reflector {name} wiring has fixed points")
    return Rotor(name, perm, RotorKind.REFLECTOR)
