# debug.py
from __future__ import annotations
import logging
from typing import Dict

_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


class Debug:
    _root_configured: bool = False          # class-level guard

    # component switches are shared by every instance
    _components: Dict[str, bool] = {
        "alphabet":    False,
        "permutation": False,
        "rotor":       False,
        "stepping":    False,
        "machine":     False,
        "config":      False,
    }

    def __init__(self) -> None:
        """Multiple Debug() instances share the same root logger config."""
        if not Debug._root_configured:
            logging.basicConfig(
                level=logging.DEBUG,
                format=_FORMAT,
                datefmt=_DATEFMT,
                handlers=[logging.StreamHandler()],
            )
            Debug._root_configured = True

        self.logger = logging.getLogger("ENIGMA")
        self.logger.setLevel(logging.DEBUG)   # components gate output

    # ── logging API ──────────────────────────────────────────────
    def log(self, component: str, message: str) -> None:
        if Debug._components.get(component, False):
            self.logger.debug("[%s] %s", component.upper(), message)

    @staticmethod
    def add_file(path: str) -> logging.Handler:
        """Also stream records to *path*; returns the new handler."""
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
        logging.getLogger().addHandler(handler)
        return handler

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug._components[c] = True

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug._components[c] = False

    def enable_all(self) -> None:
        for c in Debug._components:
            Debug._components[c] = True

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return Debug._components.copy()

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in Debug._components:
            raise ValueError(f"No such component: {component!r}")

    # nicety for `print(dbg)`
    def __repr__(self) -> str:
        active = [k for k, v in Debug._components.items() if v]
        return f"<Debug active={active}>"
