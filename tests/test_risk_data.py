from riskmap import risk_data
from riskmap.styles import DEFAULT_COLOR, RISK_COLORS, color_for, style_for_feature


def test_normalize_city_folds_prefix_case_and_whitespace():
    assert risk_data.normalize_city('City of Manila') == 'manila'
    assert risk_data.normalize_city(' manila ') == 'manila'
    assert risk_data.normalize_city('CITY OF Pasig') == 'pasig'
    assert risk_data.normalize_city('Las Piñas\r') == 'las piñas'


def test_normalize_city_handles_absent_and_carriage_returns():
    assert risk_data.normalize_city('') == ''
    assert risk_data.normalize_city(None) == ''
    assert risk_data.normalize_city('Quezon\r\nCity') == 'quezon\ncity'


def test_normalize_city_replaces_inner_non_breaking_space():
    assert risk_data.normalize_city('Las\u00a0Piñas') == 'las piñas'
    assert risk_data.normalize_city('City\u00a0of Manila') == 'manila'


def test_normalize_city_leaves_punctuation_alone():
    assert risk_data.normalize_city('Pateros.') != risk_data.normalize_city('Pateros')
    assert risk_data.normalize_city('Manila City of') == 'manila city of'


def test_parse_risk_csv_single_row():
    rows = risk_data.parse_risk_csv('city,2020_risk\nManila,High')
    assert rows == [{'city': 'Manila', '2020_risk': 'High'}]


def test_parse_risk_csv_short_and_long_rows():
    text = 'city , 2020_risk,2030_risk\r\n\n  \nPasig, Low\nTaguig,High,Moderate,extra\n'
    rows = risk_data.parse_risk_csv(text)

    assert len(rows) == 2
    assert rows[0] == {'city': 'Pasig', '2020_risk': 'Low', '2030_risk': None}
    assert rows[1] == {'city': 'Taguig', '2020_risk': 'High', '2030_risk': 'Moderate'}


def test_parse_risk_csv_does_not_unquote():
    rows = risk_data.parse_risk_csv('city,2020_risk\n"Pasig, City of",Low')
    assert rows == [{'city': '"Pasig', '2020_risk': 'City of"'}]


def test_parse_risk_csv_empty_input():
    assert risk_data.parse_risk_csv('') == []
    assert risk_data.parse_risk_csv('\n \n') == []
    assert risk_data.parse_risk_csv('city,2020_risk\n') == []


def test_available_years_follows_header_order():
    rows = risk_data.parse_risk_csv('city,2030_risk,population,2020_risk,_risk\nPasig,Low,1,High,x')
    assert risk_data.available_years(rows) == ['2030', '2020']
    assert risk_data.available_years([]) == []


def test_build_risk_lookup_is_idempotent():
    rows = risk_data.parse_risk_csv('city,2020_risk\nCity of Manila,High\nPasig,Low')
    first = risk_data.build_risk_lookup(rows, '2020')
    second = risk_data.build_risk_lookup(rows, '2020')
    assert first == second == {'manila': 'High', 'pasig': 'Low'}


def test_build_risk_lookup_canonicalizes_only_very_high():
    rows = risk_data.parse_risk_csv(
        'city,2020_risk\nPasig,very high\nTaguig,VERY HIGH\nMakati,high\nPateros,moderate'
    )
    lookup = risk_data.build_risk_lookup(rows, '2020')
    assert lookup['pasig'] == 'Very High'
    assert lookup['taguig'] == 'Very High'
    assert lookup['makati'] == 'high'
    assert lookup['pateros'] == 'moderate'


def test_build_risk_lookup_skips_blank_and_keeps_last_duplicate():
    rows = [
        {'city': 'Pasig', '2020_risk': 'Low'},
        {'city': '', '2020_risk': 'High'},
        {'city': 'Makati', '2020_risk': None},
        {'city': 'City of Pasig', '2020_risk': 'Moderate'},
    ]
    assert risk_data.build_risk_lookup(rows, '2020') == {'pasig': 'Moderate'}


def test_build_risk_lookup_unknown_year_is_empty():
    rows = risk_data.parse_risk_csv('city,2020_risk\nPasig,Low')
    assert risk_data.build_risk_lookup(rows, '1999') == {}


def test_color_for_is_total():
    for level, color in RISK_COLORS.items():
        assert color_for(level) == color
    for other in ['Unknown', 'high', 'very high', '', None, 'Extreme']:
        assert color_for(other) == DEFAULT_COLOR


def test_style_for_feature_fixed_stroke():
    style = style_for_feature({'properties': {'risk_level': 'Very High'}})
    assert style == {'fillColor': 'darkviolet', 'weight': 1, 'color': 'black', 'fillOpacity': 0.6}
    assert style_for_feature({})['fillColor'] == DEFAULT_COLOR
    assert style_for_feature({'properties': None})['fillColor'] == DEFAULT_COLOR
