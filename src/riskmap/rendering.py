"""Folium rendering for the risk choropleth."""
from __future__ import annotations

import copy
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import folium

from riskmap.risk_data import NAME_FIELD, RISK_FIELD
from riskmap.styles import StyleProps, legend_html, style_for_feature

MAP_CENTER = (14.5995, 120.9842)
MAP_ZOOM = 11
MAP_TILES = 'OpenStreetMap'


def new_risk_map(
    location: Sequence[float] = MAP_CENTER,
    zoom_start: int = MAP_ZOOM,
    tiles: str = MAP_TILES,
) -> folium.Map:
    m = folium.Map(location=list(location), zoom_start=zoom_start, tiles=tiles)
    m.get_root().html.add_child(folium.Element(legend_html()))
    return m


def risk_layer(collection: Dict, name: str = 'Risk level', show: bool = True) -> Optional[folium.GeoJson]:
    """GeoJson layer over a snapshot of the collection.

    folium evaluates style_function when the map is saved, so the features
    are copied to freeze the current risk levels. Returns None for an empty
    collection.
    """
    snapshot = copy.deepcopy(collection)
    features = snapshot.get('features') or []
    if not features:
        return None
    tooltip = None
    if all(NAME_FIELD in (f.get('properties') or {}) for f in features):
        tooltip = folium.GeoJsonTooltip(
            fields=[NAME_FIELD, RISK_FIELD],
            aliases=['Municipality', 'Risk level'],
            labels=True,
        )
    return folium.GeoJson(
        snapshot,
        name=name,
        show=show,
        style_function=style_for_feature,
        tooltip=tooltip,
    )


class FoliumRenderer:
    """Renderer backed by a folium map.

    `styles` holds the last style applied to each feature, in collection
    order. The folium map is rebuilt on `bind` and `restyle_all`.
    """

    def __init__(
        self,
        location: Sequence[float] = MAP_CENTER,
        zoom_start: int = MAP_ZOOM,
        tiles: str = MAP_TILES,
    ) -> None:
        self.location = tuple(location)
        self.zoom_start = zoom_start
        self.tiles = tiles
        self.collection: Optional[Dict] = None
        self.styles: List[StyleProps] = []
        self.map = new_risk_map(self.location, self.zoom_start, self.tiles)

    def bind(self, collection: Dict) -> None:
        self.collection = collection
        self.styles = [self.style(f) for f in collection.get('features') or []]
        self._rebuild()

    def style(self, feature: Dict) -> StyleProps:
        return style_for_feature(feature)

    def restyle_all(self) -> None:
        if self.collection is None:
            return
        self.styles = [self.style(f) for f in self.collection.get('features') or []]
        self._rebuild()

    def _rebuild(self) -> None:
        self.map = new_risk_map(self.location, self.zoom_start, self.tiles)
        layer = risk_layer(self.collection or {})
        if layer is not None:
            layer.add_to(self.map)

    def save(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.map.save(str(path))
        return path
