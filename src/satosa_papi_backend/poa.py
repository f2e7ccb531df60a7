"""
Interface of the external PAPI point of access (PoA) library.

The PAPI protocol itself lives in the PoA implementation; this package only talks to it
through the methods below. Concrete implementations are configured with ``poa_class``.
"""
import importlib
import logging

from satosa.exception import SATOSAConfigurationError

logger = logging.getLogger(__name__)


class Hook(object):
    """ A callback bound to a single PoA event, run right before the PoA issues a redirect """
    def __init__(self, event, callback):
        self.event = event
        self.callback = callback

    def __call__(self, params):
        """
        :param params: the outbound PAPI request parameters, modified in place
        :return: True to cancel the PoA's default redirect, False to let it proceed
        """
        return self.callback(params)


class PoA(object):
    """
    Point of access for a single PAPI site.

    Every call gets the current satosa.context.Context so the implementation can read the
    request (parameters, cookies, headers) without relying on global request state.
    """
    def __init__(self, site, return_url=None):
        self.site = site
        self.return_url = return_url

    def is_authenticated(self, context):
        """ :rtype: bool """
        raise NotImplementedError()

    def authenticate(self, context, hook=None):
        """
        Check the PAPI session; if there is none, prepare the redirect to the authentication
        server, run the hook on its parameters and return the redirect.

        :type hook: Hook | None
        :rtype: satosa.response.Response | None
        :return: None if a valid session exists, the redirect response otherwise
        """
        raise NotImplementedError()

    def logout(self, context, slo=True, hook=None):
        """
        :rtype: satosa.response.Response
        :return: the redirect that starts the (single) logout
        """
        raise NotImplementedError()

    def get_attributes(self, context):
        """ :rtype: dict[str, str | list[str]] | None """
        raise NotImplementedError()


def load_poa_class(dotted_path):
    module_name, _, class_name = dotted_path.rpartition('.')
    if not module_name:
        raise SATOSAConfigurationError(f"poa_class must be a dotted path, got '{dotted_path}'")
    try:
        module = importlib.import_module(module_name)
        poa_class = getattr(module, class_name)
    except (ImportError, AttributeError) as e:
        raise SATOSAConfigurationError(f"Could not load PoA class '{dotted_path}'") from e
    logger.debug(f"Loaded PoA implementation {dotted_path}")
    return poa_class
