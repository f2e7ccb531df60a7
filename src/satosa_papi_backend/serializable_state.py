import json

from satosa.exception import SATOSAStateError


class SerializableState(object):
    def __init__(self, state, stage):
        self.serializable = {'stage': stage, 'state': dict(state)}

    @classmethod
    def from_json(cls, data, stage):
        try:
            serializable = json.loads(data)
            stored_stage = serializable['stage']
            state = serializable['state']
        except (ValueError, TypeError, KeyError) as e:
            raise SATOSAStateError('Stored state is malformed') from e
        if stored_stage != stage:
            raise SATOSAStateError(f"Wrong stage in stored state: expected '{stage}', got '{stored_stage}'")
        return cls(state, stage)

    def json_dumps(self):
        return json.dumps(self.serializable)

    def state(self):
        return self.serializable['state']
