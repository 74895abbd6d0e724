# machine.py  ─────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable

from alphabet import Alphabet
from debug import Debug
from errors import EnigmaError
from permutation import Permutation
from rotor_and_reflector import Rotor

debug = Debug()
debug.disable("machine")


class Machine:
    """A complete machine: rotor slots, plugboard and a rotor catalog.

    Slot 0 holds the reflector; the last slot is the fast (rightmost)
    rotor.  Rotors are shared with the catalog, not copied, so one catalog
    should feed only one machine at a time.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        pawls: int,
        all_rotors: Iterable[Rotor],
    ) -> None:
        if num_rotors < 2:
            raise EnigmaError("A machine needs at least two rotor slots")
        if not (0 <= pawls < num_rotors):
            raise EnigmaError(f"Pawl count {pawls} must be in 0–{num_rotors - 1}")

        self.alphabet = alphabet
        self._num_rotors = num_rotors
        self._pawls = pawls

        self.catalog: dict[str, Rotor] = {}
        for rotor in all_rotors:
            key = rotor.name.upper()
            if key in self.catalog:
                raise EnigmaError(f"Duplicate rotor {rotor.name}")
            self.catalog[key] = rotor

        self.rotors: list[Rotor] = []
        self.plugboard = Permutation("", alphabet)

    def num_rotors(self) -> int:
        return self._num_rotors

    def num_pawls(self) -> int:
        return self._pawls

    # ── setup ───────────────────────────────────────────────────

    def insert_rotors(self, names: list[str]) -> None:
        """Fill the slots with the catalog rotors *names* (reflector first)
        and put every one of them at setting 0."""
        if len(names) != self._num_rotors:
            raise EnigmaError(
                f"Need exactly {self._num_rotors} rotors, got {len(names)}"
            )

        chosen: list[Rotor] = []
        for name in names:
            try:
                rotor = self.catalog[name.upper()]
            except KeyError:
                raise EnigmaError(f"Unknown rotor {name}") from None
            if rotor in chosen:
                raise EnigmaError(f"Rotor {name} used twice")
            chosen.append(rotor)

        if not chosen[0].reflecting():
            raise EnigmaError(f"First rotor {chosen[0].name} is not a reflector")
        for rotor in chosen[1:]:
            if rotor.reflecting():
                raise EnigmaError(f"Invalid placement for reflector {rotor.name}")
        for left, right in zip(chosen[1:], chosen[2:]):
            if left.rotates() and not right.rotates():
                raise EnigmaError(
                    f"Fixed rotor {right.name} cannot sit right of moving rotor {left.name}"
                )

        for rotor in chosen:
            rotor.set(0)
        self.rotors = chosen
        debug.log("machine", f"inserted {[r.name for r in chosen]}")

    def set_rotors(self, setting: str) -> None:
        """Set the non-reflector rotors to the window letters in *setting*,
        leftmost first."""
        if len(setting) != self._num_rotors - 1:
            raise EnigmaError(
                f"Setting {setting!r} must have {self._num_rotors - 1} symbols"
            )
        if not self.rotors:
            raise EnigmaError("No rotors inserted")
        for rotor, letter in zip(self.rotors[1:], setting):
            rotor.set(letter)

    def set_plugboard(self, plugboard: Permutation) -> None:
        self.plugboard = plugboard

    def positions(self) -> str:
        """Window letters of the non-reflector rotors, leftmost first."""
        return "".join(self.alphabet.to_char(r.setting) for r in self.rotors[1:])

    # ── stepping logic  ─────────────────────────────────────────

    def _check_pawls(self) -> None:
        if not self.rotors:
            raise EnigmaError("No rotors inserted")
        moving = sum(1 for r in self.rotors if r.rotates())
        if moving != self._pawls:
            raise EnigmaError(
                f"Machine has {self._pawls} pawls but {moving} moving rotors"
            )

    def _step_rotors(self) -> None:
        """Advance rotors one key-press.

        The set of rotors to move is decided from the notch state before
        anything moves; a rotor at its notch moves together with its left
        neighbour (double stepping).
        """
        advance = [self.rotors[-1]]
        for left, right in zip(self.rotors, self.rotors[1:]):
            if right.at_notch() and left.rotates() and right.rotates():
                for rotor in (left, right):
                    if rotor not in advance:
                        advance.append(rotor)

        for rotor in advance:
            rotor.advance()
        debug.log("stepping", f"positions {self.positions()}")

    # ── convert  ────────────────────────────────────────────────

    def convert_index(self, c: int) -> int:
        """Advance the machine, then convert alphabet index *c*."""
        self._check_pawls()
        self._step_rotors()

        signal = self.plugboard.permute(c)
        for rotor in reversed(self.rotors):
            signal = rotor.convert_forward(signal)
        for rotor in self.rotors[1:]:
            signal = rotor.convert_backward(signal)
        signal = self.plugboard.permute(signal)

        debug.log("machine", f"{c} -> {signal}")
        return signal

    def convert(self, msg: str) -> str:
        """Convert *msg*; symbols outside the alphabet pass through and do
        not move the rotors."""
        self._check_pawls()
        out: list[str] = []
        for ch in msg.upper():
            if self.alphabet.contains(ch):
                out.append(self.alphabet.to_char(self.convert_index(self.alphabet.to_int(ch))))
            else:
                out.append(ch)
        return "".join(out)

    def __repr__(self) -> str:
        names = " ".join(r.name for r in self.rotors)
        return f"<Machine [{names}] pos={self.positions()} plugs={self.plugboard}>"
