from urllib.parse import unquote_plus
from uuid import uuid4

RELAY_STATE_MARKER = '&RelayState='


def generate_relay_state():
    return RELAY_STATE_MARKER + uuid4().hex


def extract_relay_state(raw):
    """ Return the value of the last RelayState assignment in raw, or raw itself if there is none.

    Whatever was concatenated before the final '&RelayState=' is dropped, as is anything
    after the next '&'. The value is url-decoded.
    """
    head, marker, tail = raw.rpartition(RELAY_STATE_MARKER)
    if not marker:
        return raw
    value = tail.split('&', 1)[0]
    if not value:
        return raw
    return unquote_plus(value)


def normalize_relay_state(relay_state):
    if relay_state is None:
        relay_state = generate_relay_state()
    return extract_relay_state(relay_state)
