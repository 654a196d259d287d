"""Static county border graph."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from .counties import canonical_name

_BORDERS: dict[str, tuple[str, ...]] = {
    "Antrim": ("Londonderry", "Tyrone", "Armagh", "Down"),
    "Armagh": ("Tyrone", "Down", "Louth", "Monaghan", "Antrim"),
    "Carlow": ("Laois", "Kildare", "Wicklow", "Wexford", "Kilkenny"),
    "Cavan": ("Monaghan", "Fermanagh", "Leitrim", "Longford", "Westmeath", "Meath"),
    "Clare": ("Galway", "Limerick", "Tipperary"),
    "Cork": ("Kerry", "Limerick", "Tipperary", "Waterford"),
    "Donegal": ("Londonderry", "Tyrone", "Fermanagh", "Leitrim"),
    "Down": ("Antrim", "Armagh", "Louth"),
    "Dublin": ("Meath", "Kildare", "Wicklow"),
    "Fermanagh": ("Donegal", "Tyrone", "Monaghan", "Cavan", "Leitrim"),
    "Galway": ("Mayo", "Roscommon", "Offaly", "Tipperary", "Clare"),
    "Kerry": ("Limerick", "Cork"),
    "Kildare": ("Dublin", "Meath", "Offaly", "Laois", "Carlow", "Wicklow"),
    "Kilkenny": ("Laois", "Carlow", "Wexford", "Waterford", "Tipperary"),
    "Laois": ("Offaly", "Kildare", "Carlow", "Kilkenny", "Tipperary"),
    "Leitrim": ("Donegal", "Fermanagh", "Cavan", "Longford", "Roscommon", "Sligo"),
    "Limerick": ("Clare", "Tipperary", "Cork", "Kerry"),
    "Londonderry": ("Donegal", "Tyrone", "Antrim"),
    "Longford": ("Leitrim", "Cavan", "Westmeath", "Roscommon"),
    "Louth": ("Down", "Armagh", "Monaghan", "Meath"),
    "Mayo": ("Sligo", "Roscommon", "Galway"),
    "Meath": ("Louth", "Monaghan", "Cavan", "Westmeath", "Offaly", "Kildare", "Dublin"),
    "Monaghan": ("Armagh", "Tyrone", "Fermanagh", "Cavan", "Meath", "Louth"),
    "Offaly": ("Galway", "Roscommon", "Westmeath", "Meath", "Kildare", "Laois", "Tipperary"),
    "Roscommon": ("Sligo", "Leitrim", "Longford", "Westmeath", "Offaly", "Galway", "Mayo"),
    "Sligo": ("Leitrim", "Roscommon", "Mayo"),
    "Tipperary": ("Clare", "Galway", "Offaly", "Laois", "Kilkenny", "Waterford", "Cork", "Limerick"),
    "Tyrone": ("Londonderry", "Antrim", "Armagh", "Monaghan", "Fermanagh", "Donegal"),
    "Waterford": ("Cork", "Tipperary", "Kilkenny", "Wexford"),
    "Westmeath": ("Longford", "Cavan", "Meath", "Offaly", "Roscommon"),
    "Wexford": ("Wicklow", "Carlow", "Kilkenny", "Waterford"),
    "Wicklow": ("Dublin", "Kildare", "Carlow", "Wexford"),
}


class AdjacencyGraph:
    """Read-only undirected border graph keyed by canonical county name."""

    def __init__(self, borders: Mapping[str, tuple[str, ...] | list[str] | set[str]]) -> None:
        neighbours: dict[str, set[str]] = {name: set() for name in borders}
        for name, adjacent in borders.items():
            for other in adjacent:
                if other == name:
                    raise ValueError(f"County cannot border itself: {name}")
                neighbours[name].add(other)
                neighbours.setdefault(other, set()).add(name)
        self._neighbours: Mapping[str, frozenset[str]] = MappingProxyType(
            {name: frozenset(adjacent) for name, adjacent in neighbours.items()}
        )

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and canonical_name(name) in self._neighbours

    def counties(self) -> list[str]:
        return sorted(self._neighbours)

    def neighbours(self, name: str | None) -> frozenset[str]:
        canonical = canonical_name(name)
        if canonical is None:
            return frozenset()
        return self._neighbours.get(canonical, frozenset())

    def is_adjacent(self, a: str | None, b: str | None) -> bool:
        first = canonical_name(a)
        second = canonical_name(b)
        if not first or not second or first == second:
            return False
        return second in self._neighbours.get(first, frozenset())


GRAPH = AdjacencyGraph(_BORDERS)


def is_adjacent(a: str | None, b: str | None) -> bool:
    return GRAPH.is_adjacent(a, b)


def adjacent_hints(target: str | None) -> list[str]:
    """Neighbours of ``target`` in alphabetical order, used as locate-mode hints."""
    return sorted(GRAPH.neighbours(target))
