"""Correlate symbols across snapshots despite renames."""

from typing import Dict, Iterable, Iterator, Tuple

from .models import Diff, Renamed


class RenameMap:
    """Bidirectional ``old name <-> new name`` map built from ``Renamed`` diffs.

    Names absent from the map are unchanged: ``new_name("x") == "x"``.
    """

    def __init__(self, pairs: Iterable[Tuple[str, str]] = ()):
        self._forward: Dict[str, str] = {}
        self._reverse: Dict[str, str] = {}
        for old, new in pairs:
            self._forward[old] = new
            self._reverse[new] = old

    @classmethod
    def from_diffs(cls, diffs: Iterable[Diff]) -> "RenameMap":
        return cls((d.old_name, d.new_name) for d in diffs if isinstance(d, Renamed))

    def new_name(self, old_name: str) -> str:
        """Name in the new snapshot of a symbol known by ``old_name``."""
        return self._forward.get(old_name, old_name)

    def old_name(self, new_name: str) -> str:
        """Name in the old snapshot of a symbol known by ``new_name``."""
        return self._reverse.get(new_name, new_name)

    @property
    def forward(self) -> Dict[str, str]:
        return dict(self._forward)

    @property
    def reverse(self) -> Dict[str, str]:
        return dict(self._reverse)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._forward.items())

    def __len__(self) -> int:
        return len(self._forward)

    def __contains__(self, old_name: object) -> bool:
        return old_name in self._forward
