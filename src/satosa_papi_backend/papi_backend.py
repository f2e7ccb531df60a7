import base64
import functools
import logging
from datetime import datetime, timezone

from satosa.backends.base import BackendModule
from satosa.exception import SATOSAStateError
from satosa.internal import AuthenticationInformation, InternalData
from satosa.metadata_creation.description import MetadataDescription
from satosa.response import Response

from .definitions import ATTRIBUTES, AUTHID, PROVIDER_ID_PARAM, SP_METADATA, STATE_ID_PARAM, STATE_KEY
from .local_store import LocalStore
from .papi_source import PapiAuthSource
from .poa import load_poa_class
from .state_store import StateStore

logger = logging.getLogger(__name__)

UNSPECIFIED = 'urn:oasis:names:tc:SAML:2.0:ac:classes:unspecified'


class PapiBackend(BackendModule):
    """
    SATOSA backend authenticating users at a PAPI point of access.
    * start_auth: save the request state and redirect to PAPI
    * papi_response endpoint: restore the saved state and hand the PAPI attributes to SATOSA
    * papi_logout endpoint: start PAPI single logout, and finish it when PAPI sends the browser back
    """
    attribute_profile = 'papi'

    def __init__(self, outgoing, internal_attributes, config: dict, base_url, name):
        super().__init__(outgoing, internal_attributes, base_url, name)
        self.config = config
        self.endpoint = f"{name}/papi_response"
        self.logout_endpoint = f"{name}/papi_logout"
        self.return_url = f"{base_url}/{self.endpoint}"
        self.site = config.get('site')
        self.user_id_attr = config.get('user_id_attr')
        self.auth_class_ref = config.get('auth_class_ref', UNSPECIFIED)

        local_store = LocalStore(config['db_encryption_key'],
                                 redishost=config.get('redis_host', 'localhost'),
                                 redisport=config.get('redis_port', 6379),
                                 ttl=config.get('state_ttl', 3600))
        poa_class = load_poa_class(config['poa_class'])
        self.source = PapiAuthSource(name, config, StateStore(local_store),
                                     functools.partial(poa_class, return_url=self.return_url),
                                     self._complete_auth, self._complete_logout,
                                     logout_return_url=f"{base_url}/{self.logout_endpoint}")
        logger.info(f"PapiBackend {name} active, returning to {self.return_url}")

    def start_auth(self, context, internal_request):
        state = {SP_METADATA: {'entityid': internal_request.requester}}
        response = self.source.authenticate(state, context)
        self._remember_state_id(context)
        return response

    def _remember_state_id(self, context):
        state_id = context.get_decoration(STATE_KEY)
        context.decorate(STATE_KEY, None)
        if state_id:
            context.state[self.name] = {STATE_KEY: state_id}
            logger.debug(f"bound state id {state_id} to session {context.state.session_id}")

    def _check_state_binding(self, context):
        params = context.request or {}
        backend_state = context.state.get(self.name) or {}
        expected = backend_state.get(STATE_KEY)
        if not expected:
            return
        for param in (STATE_ID_PARAM, PROVIDER_ID_PARAM):
            received = params.get(param)
            if received and received != expected:
                raise SATOSAStateError(f"State id {received} in {param} does not belong to this session")

    def _handle_papi_response(self, context):
        self._check_state_binding(context)
        return self.source.authenticate({}, context)

    def logout(self, context):
        self._check_state_binding(context)
        response = self.source.logout({}, context)
        self._remember_state_id(context)
        return response

    def _auth_info(self):
        timestamp = datetime.now(timezone.utc).timestamp()
        return AuthenticationInformation(auth_class_ref=self.auth_class_ref, timestamp=timestamp, issuer=self.site)

    def _complete_auth(self, context, state):
        context.state.pop(self.name, None)
        attributes = state.get(ATTRIBUTES, {})
        requester = state.get(SP_METADATA, {}).get('entityid')

        internal_response = InternalData(auth_info=self._auth_info(), requester=requester)
        internal_response.attributes = self.converter.to_internal(self.attribute_profile, attributes)
        if self.user_id_attr and attributes.get(self.user_id_attr):
            internal_response.subject_id = attributes[self.user_id_attr][0]
        logger.info(f"PAPI authentication complete for requester {requester}")
        return self.auth_callback_func(context, internal_response)

    def _complete_logout(self, context, state):
        context.state.pop(self.name, None)
        logger.info(f"PAPI logout complete for auth source {state.get(AUTHID)}")
        return Response("Logged out")

    def register_endpoints(self):
        return [(f"^{self.endpoint}$", self._handle_papi_response),
                (f"^{self.logout_endpoint}$", self.logout), ]

    def get_metadata_desc(self):
        entity_id = base64.urlsafe_b64encode(self.site.encode("utf-8")).decode("utf-8")
        return [MetadataDescription(entity_id)]
