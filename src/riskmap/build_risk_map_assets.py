#!/usr/bin/env python3
"""Generate Metro Manila risk map assets (HTML + CSV) from the boundary and risk files."""
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import folium

from riskmap.loader import load_and_bind
from riskmap.map_binding import Bound, MapBinding
from riskmap.rendering import FoliumRenderer, new_risk_map, risk_layer
from riskmap.report import (
    build_join_report_df,
    build_risk_summary_df,
    unmatched_cities,
    write_csv,
    year_coverage,
)
from riskmap.risk_data import available_years

GEOJSON_SOURCE = os.environ.get('MM_RISK_GEOJSON', 'data/metro_manila.geojson')
CSV_SOURCE = os.environ.get('MM_RISK_CSV', 'data/metro_manila_risk_pivoted.csv')
OUTPUT_DIR = Path(os.environ.get('MM_RISK_OUTPUT', Path.cwd() / 'risk_map'))


def _display(path: Path) -> Path:
    try:
        return path.relative_to(Path.cwd())
    except ValueError:
        return path


def _write_map_html(renderer: FoliumRenderer, path: Path) -> None:
    renderer.save(path)
    print(f"✔️  Wrote {_display(path)}")


def _write_year_switcher_html(binding: MapBinding, years: Sequence[str], path: Path) -> None:
    """One map with a toggleable overlay for the base map and each year."""
    m = new_risk_map()
    collection = binding.state.collection
    binding.reset_to_base_map()
    base = risk_layer(collection, name='Base map', show=True)
    if base is not None:
        base.add_to(m)
    for year in years:
        binding.update_for_year(year)
        layer = risk_layer(collection, name=f"{year} risk", show=False)
        if layer is not None:
            layer.add_to(m)
    folium.LayerControl(collapsed=False, position='topright').add_to(m)
    binding.reset_to_base_map()
    path.parent.mkdir(parents=True, exist_ok=True)
    m.save(str(path))
    print(f"✔️  Wrote {_display(path)}")


def build_assets(
    geojson_source: str,
    csv_source: str,
    output_dir: Path,
    years: Optional[Sequence[str]] = None,
) -> List[Path]:
    renderer = FoliumRenderer()
    binding = MapBinding(renderer)
    if not load_and_bind(binding, geojson_source, csv_source):
        raise SystemExit(1)
    state = binding.state
    if not isinstance(state, Bound):
        raise SystemExit(1)

    years = list(years or available_years(state.rows))
    written: List[Path] = []

    base_path = output_dir / 'risk_map_base.html'
    _write_map_html(renderer, base_path)
    written.append(base_path)

    for year in years:
        if year_coverage(state.rows, year) == 0:
            print(f"⚠️  No risk values for {year}; every municipality renders as Unknown", file=sys.stderr)
        binding.update_for_year(year)
        year_path = output_dir / f"risk_map_{year}.html"
        _write_map_html(renderer, year_path)
        written.append(year_path)

    switcher_path = output_dir / 'risk_map.html'
    _write_year_switcher_html(binding, years, switcher_path)
    written.append(switcher_path)

    summary_path = output_dir / 'risk_summary.csv'
    write_csv(build_risk_summary_df(state.rows, years), summary_path)
    written.append(summary_path)

    join_df = build_join_report_df(state.features, state.rows)
    missing = unmatched_cities(join_df)
    if missing:
        print(f"⚠️  {len(missing)} cities did not match a boundary: {', '.join(missing)}")
    join_path = output_dir / 'join_report.csv'
    write_csv(join_df, join_path)
    written.append(join_path)
    return written


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Render the Metro Manila risk choropleth per year.')
    parser.add_argument('year', nargs='*', help='Optional years (default: every <year>_risk column)')
    parser.add_argument('--geojson', default=GEOJSON_SOURCE, help='Boundary GeoJSON path or URL')
    parser.add_argument('--csv', default=CSV_SOURCE, help='Pivoted risk CSV path or URL')
    parser.add_argument('--output', type=Path, default=OUTPUT_DIR, help='Output directory')
    args = parser.parse_args(argv)

    build_assets(args.geojson, args.csv, args.output, args.year or None)


if __name__ == '__main__':
    main()
