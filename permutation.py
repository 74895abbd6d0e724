# permutation.py
from __future__ import annotations

import re

from alphabet import Alphabet
from debug import Debug
from errors import EnigmaError

debug = Debug()

# one "(...)" group; whitespace is stripped before matching
_cycle_re = re.compile(r"\(([^()]*)\)")


def parse_cycles(cycles: str) -> list[str]:
    """Split cycle notation such as ``"(ABD) (FG)"`` into ``["ABD", "FG"]``."""
    text = "".join(cycles.split())
    found = _cycle_re.findall(text)
    if _cycle_re.sub("", text):
        raise EnigmaError(f"Malformed cycle notation {cycles!r}")
    if any(not c for c in found):
        raise EnigmaError(f"Empty cycle in {cycles!r}")
    return found


class Permutation:
    """A permutation of an alphabet's indices, written as disjoint cycles.

    Symbols that appear in no cycle map to themselves.  The cycles are
    parsed once into forward/backward lookup tables; ``add_cycles`` extends
    both tables.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self.alphabet = alphabet
        self.cycles: list[str] = []
        self._fwd: dict[str, str] = {}
        self._rev: dict[str, str] = {}
        self.add_cycles(cycles)

    def add_cycles(self, cycles: str) -> None:
        """Append more cycles (e.g. a wiring continued on the next line)."""
        new = parse_cycles(cycles)
        seen: set[str] = set()
        for cycle in new:
            for ch in cycle:
                if not self.alphabet.contains(ch):
                    raise EnigmaError(f"Cycle symbol {ch!r} not in alphabet")
                if ch in self._fwd or ch in seen:
                    raise EnigmaError(f"Symbol {ch!r} appears in more than one cycle")
                seen.add(ch)

        # passed validation → commit
        for cycle in new:
            for i, ch in enumerate(cycle):
                nxt = cycle[(i + 1) % len(cycle)]
                self._fwd[ch] = nxt
                self._rev[nxt] = ch
            self.cycles.append(cycle)
        debug.log("permutation", f"cycles now {self}")

    def size(self) -> int:
        return self.alphabet.size()

    def wrap(self, p: int) -> int:
        return p % self.size()

    # ── symbol level ──────────────────────────────────────────────
    def permute_char(self, p: str) -> str:
        self.alphabet.to_int(p)
        return self._fwd.get(p, p)

    def invert_char(self, c: str) -> str:
        self.alphabet.to_int(c)
        return self._rev.get(c, c)

    # ── index level ───────────────────────────────────────────────
    def permute(self, p: int) -> int:
        ch = self.alphabet.to_char(self.wrap(p))
        return self.alphabet.to_int(self.permute_char(ch))

    def invert(self, c: int) -> int:
        ch = self.alphabet.to_char(self.wrap(c))
        return self.alphabet.to_int(self.invert_char(ch))

    def derangement(self) -> bool:
        """True iff no symbol maps to itself."""
        return all(self._fwd.get(ch, ch) != ch for ch in self.alphabet)

    def __str__(self) -> str:
        return " ".join(f"({c})" for c in self.cycles)

    def __repr__(self) -> str:
        return f"<Permutation {self}>"
