"""
Conversation Store - best-effort persistence of chat exchanges
"""
from typing import List, Optional

import redis

from ish_bot.config import Config
from ish_bot.logging_config import get_logger
from ish_bot.models import ExchangeRecord

logger = get_logger("ish-store")


class ConversationStore:
    """
    Base class for exchange persistence.

    Subclasses implement _write. record() never raises: every failure is
    logged and dropped so the chat reply is never affected.
    """

    def record(self, exchange: ExchangeRecord) -> None:
        try:
            self._write(exchange)
        except Exception as e:
            logger.error("persistence_failed",
                         session_id=exchange.session_id,
                         error_type=type(e).__name__,
                         error=str(e))

    def _write(self, exchange: ExchangeRecord) -> None:
        raise NotImplementedError


class InMemoryConversationStore(ConversationStore):
    """Process-local store for development and tests"""

    def __init__(self):
        self.records: List[ExchangeRecord] = []

    def _write(self, exchange: ExchangeRecord) -> None:
        self.records.append(exchange)


class RedisConversationStore(ConversationStore):
    """Appends each exchange as JSON to a Redis list"""

    def __init__(self, key: str = None):
        self.key = key or Config.CHAT_HISTORY_KEY

        try:
            self.client = redis.Redis(
                host=Config.REDIS_HOST,
                port=Config.REDIS_PORT,
                password=Config.REDIS_PASSWORD,
                socket_connect_timeout=5,
                decode_responses=True
            )
            self.client.ping()
            logger.info("redis_connected", host=Config.REDIS_HOST, key=self.key)
        except Exception as e:
            logger.warning("redis_connection_failed", error=str(e))
            self.client = None

    def record(self, exchange: ExchangeRecord) -> None:
        if self.client is None:
            logger.warning("persistence_unavailable", session_id=exchange.session_id)
            return
        super().record(exchange)

    def _write(self, exchange: ExchangeRecord) -> None:
        self.client.rpush(self.key, exchange.model_dump_json())
        logger.info("exchange_recorded", session_id=exchange.session_id)


# Singleton instance
_conversation_store: Optional[ConversationStore] = None


def get_conversation_store() -> ConversationStore:
    """Get or create the conversation store singleton"""
    global _conversation_store
    if _conversation_store is None:
        _conversation_store = RedisConversationStore()
    return _conversation_store
