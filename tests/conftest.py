import json

import pytest

PASIG_GEOJSON = {
    'type': 'FeatureCollection',
    'features': [
        {
            'type': 'Feature',
            'properties': {'adm3_en': 'City of Pasig'},
            'geometry': {
                'type': 'Polygon',
                'coordinates': [[[121.05, 14.55], [121.11, 14.55], [121.11, 14.61], [121.05, 14.61], [121.05, 14.55]]],
            },
        },
        {
            'type': 'Feature',
            'properties': {'adm3_en': 'Quezon City'},
            'geometry': {
                'type': 'Polygon',
                'coordinates': [[[121.0, 14.62], [121.1, 14.62], [121.1, 14.72], [121.0, 14.72], [121.0, 14.62]]],
            },
        },
    ],
}

RISK_CSV = 'city,2020_risk,2025_risk\nPasig,High,Low\nQuezon City,very high,\nMakati,Moderate,VERY HIGH\n'


@pytest.fixture
def boundary():
    return json.loads(json.dumps(PASIG_GEOJSON))


@pytest.fixture
def source_files(tmp_path):
    geojson_path = tmp_path / 'metro_manila.geojson'
    csv_path = tmp_path / 'metro_manila_risk_pivoted.csv'
    geojson_path.write_text(json.dumps(PASIG_GEOJSON), encoding='utf-8')
    csv_path.write_text(RISK_CSV, encoding='utf-8')
    return geojson_path, csv_path
