"""
PAPI support for SATOSA: authenticate users at a PAPI point of access (PoA).
* Save the authentication state before the PoA redirects to the PAPI authentication server
* Restore the saved state when the browser returns with SSPStateID (or providerId)
* Convert the PAPI attributes to list values and hand them to SATOSA

Persist state: the PoA redirect leaves the proxy, so the state is stored in redis under a random key
and the key travels in the PAPI return URL as SSPStateID. The key is also kept in SATOSA_STATE so a
returning browser cannot present a state id that belongs to another session.
Stored states are encrypted with db_encryption_key and expire after state_ttl seconds.

The PAPI protocol is not implemented here: configure poa_class with an implementation of
satosa_papi_backend.poa.PoA.
"""

from .papi_backend import PapiBackend
from .papi_source import PapiAuthSource
