"""Bind boundary geometry to risk rows and recolor it per year."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Sequence, Union

from riskmap.errors import MapAlreadyBoundError
from riskmap.risk_data import (
    NAME_FIELD,
    RISK_FIELD,
    UNKNOWN_RISK,
    RiskLookup,
    RiskTableRow,
    build_risk_lookup,
    normalize_city,
    risk_column,
)
from riskmap.styles import StyleProps


class Renderer(Protocol):
    def bind(self, collection: Dict) -> None: ...

    def style(self, feature: Dict) -> StyleProps: ...

    def restyle_all(self) -> None: ...


@dataclass(frozen=True)
class Unbound:
    pass


@dataclass(frozen=True)
class Bound:
    collection: Dict
    rows: Sequence[RiskTableRow]

    @property
    def features(self) -> List[Dict]:
        return self.collection.get('features') or []


MapState = Union[Unbound, Bound]


def _set_risk(feature: Dict, risk: str) -> None:
    props = feature.get('properties')
    if props is None:
        props = feature['properties'] = {}
    props[RISK_FIELD] = risk


class MapBinding:
    """Owns the loaded boundaries and risk table for the lifetime of the map.

    Reset and update are no-ops until `bind` has run; there is no way back to
    the unbound state once bound.
    """

    def __init__(self, renderer: Renderer) -> None:
        self.renderer = renderer
        self.state: MapState = Unbound()

    @property
    def is_bound(self) -> bool:
        return isinstance(self.state, Bound)

    def bind(self, collection: Dict, rows: Sequence[RiskTableRow]) -> None:
        if isinstance(self.state, Bound):
            raise MapAlreadyBoundError('Boundary geometry is already bound')
        state = Bound(collection=collection, rows=tuple(rows))
        for feature in state.features:
            _set_risk(feature, UNKNOWN_RISK)
        self.renderer.bind(collection)
        self.state = state

    def show_base_map(self) -> None:
        print('Reset to base map')
        if not isinstance(self.state, Bound):
            return
        for feature in self.state.features:
            _set_risk(feature, UNKNOWN_RISK)
        self.renderer.restyle_all()

    def update_map(self, year: str) -> Optional[RiskLookup]:
        if not isinstance(self.state, Bound):
            print('⚠️  Map or CSV not ready')
            return None
        print(f"Updating map for: {risk_column(year)}")
        lookup = build_risk_lookup(self.state.rows, year)
        for feature in self.state.features:
            name = (feature.get('properties') or {}).get(NAME_FIELD)
            _set_risk(feature, lookup.get(normalize_city(name), UNKNOWN_RISK))
        self.renderer.restyle_all()
        return lookup

    # Entry points for UI wiring.
    def reset_to_base_map(self) -> None:
        self.show_base_map()

    def update_for_year(self, year: str) -> Optional[RiskLookup]:
        return self.update_map(year)
