"""Parse the pivoted risk CSV and join it to boundary names."""
from __future__ import annotations

import re
from typing import Dict, Iterable, List, Mapping, Optional

CITY_COLUMN = 'city'
RISK_SUFFIX = '_risk'
NAME_FIELD = 'adm3_en'
RISK_FIELD = 'risk_level'
UNKNOWN_RISK = 'Unknown'
VERY_HIGH = 'Very High'

RiskTableRow = Dict[str, Optional[str]]
RiskLookup = Dict[str, str]

_CITY_PREFIX = re.compile(r'^city of ', re.IGNORECASE)


def normalize_city(name: Optional[str]) -> str:
    """Canonical join key for a municipality name.

    Only whitespace, case and a leading "City of" are folded. Names that differ
    in punctuation will not join and have to be fixed in the source data.
    """
    if not name:
        return ''
    cleaned = name.replace('\r', '').replace('\u00a0', ' ').strip().lower()
    return _CITY_PREFIX.sub('', cleaned, count=1)


def parse_risk_csv(text: str) -> List[RiskTableRow]:
    # Plain comma split: quoted fields and embedded commas are not supported.
    lines = [line for line in (text or '').split('\n') if line.strip() != '']
    if not lines:
        return []
    headers = [header.strip() for header in lines[0].split(',')]
    rows: List[RiskTableRow] = []
    for line in lines[1:]:
        values = [value.strip() for value in line.split(',')]
        rows.append(
            {header: (values[idx] if idx < len(values) else None) for idx, header in enumerate(headers)}
        )
    return rows


def risk_column(year: str) -> str:
    return f"{year}{RISK_SUFFIX}"


def available_years(rows: Iterable[Mapping[str, Optional[str]]]) -> List[str]:
    """Years with a `<year>_risk` column, in header order."""
    first = next(iter(rows), None)
    if first is None:
        return []
    return [
        header[: -len(RISK_SUFFIX)]
        for header in first
        if header.endswith(RISK_SUFFIX) and len(header) > len(RISK_SUFFIX)
    ]


def canonical_risk(raw: str) -> str:
    risk = raw.strip()
    if risk.lower() == VERY_HIGH.lower():
        return VERY_HIGH
    return risk


def build_risk_lookup(rows: Iterable[Mapping[str, Optional[str]]], year: str) -> RiskLookup:
    column = risk_column(year)
    lookup: RiskLookup = {}
    for row in rows:
        city = row.get(CITY_COLUMN)
        raw_risk = row.get(column)
        if not city or not raw_risk:
            continue
        # last row wins for duplicate cities
        lookup[normalize_city(city)] = canonical_risk(raw_risk)
    return lookup
