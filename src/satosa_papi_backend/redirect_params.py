import logging
from urllib.parse import urlencode

from satosa.exception import SATOSAStateError

from .definitions import HLI_PARAM, OPOA_PARAM, STATE_ID_PARAM, URL_PARAM

logger = logging.getLogger(__name__)


class RedirectParameterSet(object):
    """ Parameters injected into the outbound PAPI redirect of one transaction. Usable once. """
    def __init__(self, state_id, hli=None, papiopoa=None, return_url=None):
        self.state_id = state_id
        self.hli = hli
        self.papiopoa = papiopoa
        self.return_url = return_url
        self.consumed = False

    def modify_params(self, params):
        """
        Set home locator and PAPIOPOA hints, replace the return URL if one was given and append
        the state id to it.

        :return: False, the PoA must not cancel its redirect
        """
        if self.consumed:
            raise SATOSAStateError(f"Redirect parameters for state {self.state_id} already used")
        self.consumed = True

        if self.hli:
            params[HLI_PARAM] = self.hli
        if self.papiopoa:
            params[OPOA_PARAM] = self.papiopoa
        if self.return_url:
            params[URL_PARAM] = self.return_url
        separator = '&' if '?' in params[URL_PARAM] else '?'
        params[URL_PARAM] = params[URL_PARAM] + separator + urlencode({STATE_ID_PARAM: self.state_id})
        logger.debug(f"PAPI redirect parameters: {params}")
        return False
