from __future__ import annotations

from typing import Dict, Mapping, Optional, Union

from riskmap.risk_data import RISK_FIELD, UNKNOWN_RISK

DEFAULT_COLOR = 'lightgrey'

RISK_COLORS = {
    'Low': 'green',
    'Moderate': 'yellow',
    'High': 'red',
    'Very High': 'darkviolet',
}

STROKE_COLOR = 'black'
STROKE_WEIGHT = 1
FILL_OPACITY = 0.6

StyleProps = Dict[str, Union[str, float]]


def color_for(risk: Optional[str]) -> str:
    return RISK_COLORS.get(risk, DEFAULT_COLOR) if risk else DEFAULT_COLOR


def style_for_feature(feature: Mapping) -> StyleProps:
    """Leaflet/folium style for one boundary feature, keyed on its risk level."""
    props = feature.get('properties') or {}
    return {
        'fillColor': color_for(props.get(RISK_FIELD)),
        'weight': STROKE_WEIGHT,
        'color': STROKE_COLOR,
        'fillOpacity': FILL_OPACITY,
    }


def legend_html(title: str = 'Risk level') -> str:
    chips = ''.join(
        f"<div><span style='display:inline-block;width:14px;height:14px;margin-right:6px;"
        f"background:{color};opacity:{FILL_OPACITY};border:1px solid {STROKE_COLOR};'></span>{label}</div>"
        for label, color in [*RISK_COLORS.items(), (UNKNOWN_RISK, DEFAULT_COLOR)]
    )
    return (
        "<div style='position: fixed; bottom: 28px; left: 28px; z-index: 9999; "
        "background: rgba(255,255,255,0.92); padding: 10px 14px; border-radius: 8px; "
        "border: 1px solid #999; font-size: 13px; line-height: 1.6;'>"
        f"<strong>{title}</strong>{chips}</div>"
    )
