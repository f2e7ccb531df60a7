from satosa_papi_backend.relay_state import extract_relay_state, generate_relay_state, normalize_relay_state


def test_generated_relay_state_is_tagged():
    assert generate_relay_state().startswith('&RelayState=')


def test_synthesized_relay_state_is_unique_and_not_empty():
    values = {normalize_relay_state(None) for _ in range(50)}
    assert len(values) == 50
    assert '' not in values
    assert not any(v.startswith('&') for v in values)


def test_extract_ignores_prefix():
    for prefix in ['', 'foo', 'a=1&b=2', '&RelayState=old', 'x&RelayState=first&y=2']:
        assert extract_relay_state(prefix + '&RelayState=wanted') == 'wanted'


def test_extract_stops_at_next_parameter():
    assert extract_relay_state('&RelayState=wanted&PAPIOPOA=sp') == 'wanted'


def test_extract_url_decodes_value():
    assert extract_relay_state('&RelayState=https%3A%2F%2Fsp.example.org%2Fhome') == 'https://sp.example.org/home'


def test_plain_relay_state_is_kept():
    assert extract_relay_state('https://sp.example.org/home') == 'https://sp.example.org/home'
    assert normalize_relay_state('opaque-value') == 'opaque-value'


def test_empty_extraction_falls_back_to_raw_value():
    assert extract_relay_state('foo&RelayState=') == 'foo&RelayState='
