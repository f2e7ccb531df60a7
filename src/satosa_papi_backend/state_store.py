import logging

from satosa.exception import SATOSAStateError

from .serializable_state import SerializableState

logger = logging.getLogger(__name__)


class StateStore(object):
    """ Persist an authentication state across the PAPI redirect, addressed by an opaque handle """
    def __init__(self, local_store):
        self.local_store = local_store

    def save_state(self, state, stage):
        handle = self.local_store.set(SerializableState(state, stage).json_dumps())
        logger.info(f"stored state for stage {stage} in {handle}")
        return handle

    def load_state(self, handle, stage):
        logger.info(f"Loading state from key: {handle}")
        stored = self.local_store.get(handle)
        if stored is None:
            raise SATOSAStateError(f"Unknown or expired state id '{handle}'")
        state = SerializableState.from_json(stored, stage).state()
        logger.debug(f"State content from key {handle}: {state}")
        return state
