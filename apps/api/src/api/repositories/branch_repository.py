from __future__ import annotations

from collections.abc import Iterable

from geo_engine.models import Facility

LAGOS_BRANCHES: tuple[Facility, ...] = (
    Facility(id=1, name="Ikeja Pharmacy", lat=6.6020, lon=3.3515),
    Facility(id=2, name="Victoria Island Pharmacy", lat=6.4281, lon=3.4216),
    Facility(id=3, name="Lekki Pharmacy", lat=6.4654, lon=3.4765),
    Facility(id=4, name="Surulere Pharmacy", lat=6.5097, lon=3.3619),
)


class BranchRepository:
    """Fixed, ordered branch registry; built once and only read afterwards."""

    def __init__(self, branches: Iterable[Facility] = LAGOS_BRANCHES) -> None:
        self._items = tuple(branches)
        if not self._items:
            raise ValueError("branch registry must contain at least one branch")

    def list_branches(self) -> tuple[Facility, ...]:
        return self._items
