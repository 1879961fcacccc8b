"""Fetch the boundary GeoJSON and the risk CSV."""
from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Tuple, Union

import requests

from riskmap.errors import RiskSourceError
from riskmap.map_binding import MapBinding
from riskmap.risk_data import parse_risk_csv

REQUEST_TIMEOUT = 30

Source = Union[str, Path]


def _is_url(source: Source) -> bool:
    return isinstance(source, str) and source.startswith(('http://', 'https://'))


def fetch_text(source: Source) -> str:
    if _is_url(source):
        response = requests.get(str(source), timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        return response.content.decode('utf-8-sig')
    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Missing source file: {path}")
    return path.read_text(encoding='utf-8-sig')


def load_geojson(source: Source) -> Dict:
    try:
        payload = json.loads(fetch_text(source))
    except json.JSONDecodeError as exc:
        raise RiskSourceError(f"Invalid GeoJSON in {source}: {exc}") from exc
    if not isinstance(payload, dict) or not isinstance(payload.get('features'), list):
        raise RiskSourceError(f"{source} is not a GeoJSON FeatureCollection")
    return payload


def load_sources(geojson_source: Source, csv_source: Source) -> Tuple[Dict, str]:
    """Fetch both sources concurrently and wait for both.

    The first failure propagates; nothing is retried.
    """
    with ThreadPoolExecutor(max_workers=2) as pool:
        geojson_future = pool.submit(load_geojson, geojson_source)
        csv_future = pool.submit(fetch_text, csv_source)
        return geojson_future.result(), csv_future.result()


def load_and_bind(binding: MapBinding, geojson_source: Source, csv_source: Source) -> bool:
    """Load both sources and bind them; on any load failure stay unbound."""
    try:
        geojson, csv_text = load_sources(geojson_source, csv_source)
    except Exception as exc:
        print(f"⚠️  Load error: {exc}")
        return False
    print(f"GeoJSON loaded: {len(geojson['features'])} features")
    rows = parse_risk_csv(csv_text)
    print(f"CSV parsed: {len(rows)} rows")
    binding.bind(geojson, rows)
    return True
