# alphabet.py
from __future__ import annotations

from debug import Debug
from errors import EnigmaError

debug = Debug()


class Alphabet:
    """Ordered set of symbols; a symbol's index is its position."""

    def __init__(self, chars: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ") -> None:
        if not chars:
            raise EnigmaError("Alphabet must contain at least one symbol")
        if any(ch.isspace() for ch in chars):
            raise EnigmaError(f"Alphabet {chars!r} contains whitespace")

        self.chars: str = chars
        self.char_to_index: dict[str, int] = {}
        for i, ch in enumerate(chars):
            if ch in self.char_to_index:
                raise EnigmaError(f"Duplicate symbol {ch!r} in alphabet")
            self.char_to_index[ch] = i
        debug.log("alphabet", f"{len(chars)} symbols: {chars}")

    def size(self) -> int:
        return len(self.chars)

    def contains(self, ch: str) -> bool:
        return ch in self.char_to_index

    # integer → symbol
    def to_char(self, index: int) -> str:
        if not (0 <= index < len(self.chars)):
            hi = len(self.chars) - 1
            raise EnigmaError(f"Alphabet index {index} out of range 0–{hi}")
        return self.chars[index]

    # symbol → integer
    def to_int(self, ch: str) -> int:
        try:
            return self.char_to_index[ch]
        except KeyError:
            raise EnigmaError(f"Character {ch!r} not in alphabet") from None

    # niceties
    __len__ = size
    __contains__ = contains

    def __iter__(self):
        return iter(self.chars)

    def __repr__(self) -> str:
        return f"<Alphabet {self.chars}>"
