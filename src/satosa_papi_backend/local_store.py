import logging
import secrets

import redis
from cryptography.fernet import Fernet, InvalidToken
from satosa.exception import SATOSAStateError

logger = logging.getLogger(__name__)

KEY_PREFIX = 'papi_state:'


class LocalStore(object):
    """
    Encrypted key/value store in redis for state that does not fit into the SATOSA cookie.

    Keys are random tokens, values are Fernet-encrypted and expire after ttl seconds.
    """
    def __init__(self, db_encryption_key, redishost='localhost', redisport=6379, ttl=3600, redis_client=None):
        self.fernet = Fernet(db_encryption_key)
        self.ttl = ttl
        self.redis = redis_client if redis_client is not None else redis.Redis(host=redishost, port=redisport)

    def set(self, value: str) -> str:
        key = secrets.token_urlsafe(32)
        self.redis.set(KEY_PREFIX + key, self.fernet.encrypt(value.encode('utf-8')), ex=self.ttl)
        logger.debug(f"stored {len(value)} characters under key {key}, ttl {self.ttl}s")
        return key

    def get(self, key: str):
        token = self.redis.get(KEY_PREFIX + key)
        if token is None:
            logger.info(f"no entry for key {key}")
            return None
        try:
            return self.fernet.decrypt(token).decode('utf-8')
        except InvalidToken as e:
            message = f"entry for key {key} cannot be decrypted with the configured db_encryption_key"
            logger.warning(message)
            raise SATOSAStateError(message) from e
