import logging

from satosa.exception import SATOSAConfigurationError

from .attributes import parse_attributes
from .definitions import (
    ATTRIBUTES, AUTHID, PAPI_REDIRECT_URL_FINISH, PAPI_SLO_REDIRECT_URL_FINISH, PROVIDER_ID_PARAM,
    RELAY_STATE, SP_METADATA, STAGE_INIT, STAGE_LOGOUT, STATE_ID_PARAM, STATE_KEY,
)
from .poa import Hook
from .redirect_params import RedirectParameterSet
from .relay_state import normalize_relay_state

logger = logging.getLogger(__name__)


class PapiAuthSource(object):
    """
    Log in and out through a PAPI point of access.

    Before the PoA redirects the browser away, the authentication state is saved in the
    state store and its id is appended to the PAPI return URL. When the browser comes back
    with that id (SSPStateID) or with a providerId, the saved state is restored and the
    authentication is completed with the attributes released by the PoA.
    """
    def __init__(self, auth_id, config: dict, state_store, poa_factory, complete_auth, complete_logout,
                 logout_return_url=None):
        if not config.get('site'):
            raise SATOSAConfigurationError('PAPI authentication source is not properly configured: missing [site]')
        self.auth_id = auth_id
        self.hli = config.get('hli')
        self.state_store = state_store
        self.complete_auth = complete_auth
        self.complete_logout = complete_logout
        self.logout_return_url = logout_return_url
        self.poa = poa_factory(config['site'])
        logger.info(f"PAPI authentication source {auth_id} active for site {config['site']}")

    @staticmethod
    def _request_params(context):
        return context.request or {}

    def _save_for_redirect(self, state, context, event, stage, papiopoa=None, return_url=None):
        state[AUTHID] = self.auth_id
        state_id = self.state_store.save_state(state, stage)
        context.decorate(STATE_KEY, state_id)
        redirect_params = RedirectParameterSet(state_id, hli=self.hli, papiopoa=papiopoa, return_url=return_url)
        return Hook(event, redirect_params.modify_params)

    def authenticate(self, state: dict, context):
        """
        :param state: information about the current authentication, updated in place until a
        stored state replaces it
        :param context: the satosa.context.Context of the current request
        :return: the PoA redirect, or whatever complete_auth returns
        """
        papiopoa = None
        if SP_METADATA in state:
            papiopoa = state[SP_METADATA]['entityid']
            state.pop(RELAY_STATE, None)

        state[RELAY_STATE] = normalize_relay_state(state.get(RELAY_STATE))

        params = self._request_params(context)
        hook = None
        if PROVIDER_ID_PARAM in params:
            state_id = str(params[PROVIDER_ID_PARAM])
            logger.info(f"Resuming state {state_id} for provider request")
            state = self.state_store.load_state(state_id, STAGE_INIT)
        elif STATE_ID_PARAM in params:
            state_id = str(params[STATE_ID_PARAM])
            logger.info(f"Returning from PAPI, restoring state {state_id}")
            state = self.state_store.load_state(state_id, STAGE_INIT)
        elif not self.poa.is_authenticated(context):
            hook = self._save_for_redirect(state, context, PAPI_REDIRECT_URL_FINISH, STAGE_INIT, papiopoa)

        response = self.poa.authenticate(context, hook=hook)
        if response is not None:
            logger.info('No PAPI session, redirecting to the authentication server')
            return response

        state[ATTRIBUTES] = parse_attributes(self.poa.get_attributes(context))
        logger.debug(f"PAPI attributes: {state[ATTRIBUTES]}")
        return self.complete_auth(context, state)

    def logout(self, state: dict, context):
        """
        Log out of the PAPI session.

        While a session exists the state is saved and the PoA logout redirect is returned, with
        logout_return_url (if given) as the URL the PoA sends the browser back to. The PoA offers
        no hook when its logout finishes, so the return path depends on it sending SSPStateID back.
        Without a session and without SSPStateID this is a no-op.
        """
        if self.poa.is_authenticated(context):
            hook = self._save_for_redirect(state, context, PAPI_SLO_REDIRECT_URL_FINISH, STAGE_LOGOUT,
                                           return_url=self.logout_return_url)
            logger.info('Starting PAPI single logout')
            return self.poa.logout(context, slo=True, hook=hook)

        params = self._request_params(context)
        if STATE_ID_PARAM in params:
            state_id = str(params[STATE_ID_PARAM])
            logger.info(f"Returning from PAPI logout, restoring state {state_id}")
            state = self.state_store.load_state(state_id, STAGE_LOGOUT)
            return self.complete_logout(context, state)

        logger.debug('No PAPI session and no logout in progress')
        return None
