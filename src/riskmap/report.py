"""Tabular summaries of the risk table and of the name join."""
from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from riskmap.risk_data import (
    CITY_COLUMN,
    NAME_FIELD,
    build_risk_lookup,
    normalize_city,
    risk_column,
)

SUMMARY_COLUMNS = ['year', 'risk_level', 'cities']
JOIN_COLUMNS = ['city', 'normalized', 'matched', 'duplicate']


def build_risk_summary_df(rows: Sequence[Mapping[str, Optional[str]]], years: Iterable[str]) -> pd.DataFrame:
    """Number of cities per risk level for each year, after the lookup rules."""
    records: List[Dict] = []
    for year in years:
        counts = Counter(build_risk_lookup(rows, year).values())
        for level, count in sorted(counts.items()):
            records.append({'year': str(year), 'risk_level': level, 'cities': count})
    return pd.DataFrame(records, columns=SUMMARY_COLUMNS)


def build_join_report_df(features: Iterable[Mapping], rows: Sequence[Mapping[str, Optional[str]]]) -> pd.DataFrame:
    """One row per CSV city: whether it joins a boundary and whether it repeats.

    `duplicate` marks every row whose normalized name appears more than once;
    the lookup keeps only the last of them.
    """
    boundary_names = {normalize_city((f.get('properties') or {}).get(NAME_FIELD)) for f in features}
    cities = [row.get(CITY_COLUMN) for row in rows if row.get(CITY_COLUMN)]
    normalized = [normalize_city(city) for city in cities]
    seen = Counter(normalized)
    df = pd.DataFrame(
        {
            'city': cities,
            'normalized': normalized,
            'matched': [name in boundary_names for name in normalized],
            'duplicate': [seen[name] > 1 for name in normalized],
        },
        columns=JOIN_COLUMNS,
    )
    return df


def unmatched_cities(join_df: pd.DataFrame) -> List[str]:
    return join_df.loc[~join_df['matched'].astype(bool), 'city'].tolist()


def year_coverage(rows: Sequence[Mapping[str, Optional[str]]], year: str) -> float:
    """Share of rows carrying a value for the year's risk column."""
    if not rows:
        return 0.0
    column = risk_column(year)
    filled = sum(1 for row in rows if row.get(column))
    return filled / len(rows)


def write_csv(df: pd.DataFrame, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    try:
        display_path = path.relative_to(Path.cwd())
    except ValueError:
        display_path = path
    print(f"✔️  Wrote {display_path}")
