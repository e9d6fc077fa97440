"""
Relay Service - validates a chat request, generates the reply and records the exchange
"""
import uuid
from typing import Any, Callable, Optional

from pydantic import ValidationError

from ish_bot.logging_config import get_logger
from ish_bot.models import ChatRequest, ChatResponse, ExchangeMetadata, ExchangeRecord
from ish_bot.prompts import compose_prompt
from ish_bot.services.conversation_store import ConversationStore, get_conversation_store
from ish_bot.services.generation_gateway import (
    FALLBACK_REPLY,
    GenerationGateway,
    get_generation_gateway,
)

logger = get_logger("ish-relay")

MISSING_FIELDS_MESSAGE = "Missing required fields: message and lang"
INVALID_SESSION_MESSAGE = "Invalid field: session_id must be a string"

# Called as schedule(func, *args); FastAPI's BackgroundTasks.add_task fits
Scheduler = Callable[..., Any]


class RelayValidationError(ValueError):
    """The request body is not an object with a non-empty message and lang"""


class RelayService:
    """Stateless per-request orchestration of prompt, generation and persistence"""

    def __init__(self, gateway: GenerationGateway, store: ConversationStore):
        self.gateway = gateway
        self.store = store

    def validate(self, payload: Any) -> ChatRequest:
        """
        Parse the raw request body.

        Raises:
            RelayValidationError: If message or lang is missing, blank or not a
                string, or if session_id is present but not a string
        """
        if not isinstance(payload, dict):
            raise RelayValidationError(MISSING_FIELDS_MESSAGE)
        session_id = payload.get("session_id")
        if session_id is not None and not isinstance(session_id, str):
            logger.warning("chat_request_rejected", field="session_id")
            raise RelayValidationError(INVALID_SESSION_MESSAGE)
        try:
            return ChatRequest.model_validate(payload)
        except ValidationError as e:
            logger.warning("chat_request_rejected", errors=e.error_count())
            raise RelayValidationError(MISSING_FIELDS_MESSAGE) from e

    def handle(
        self,
        payload: Any,
        metadata: Optional[ExchangeMetadata] = None,
        schedule: Optional[Scheduler] = None
    ) -> ChatResponse:
        """
        Relay one chat message to the model.

        Args:
            payload: Decoded JSON body of the request
            metadata: Caller address and user agent to store with the exchange
            schedule: Defers persistence until after the response; persists
                inline when omitted

        Returns:
            ChatResponse with a non-empty reply and the resolved session id
        """
        request = self.validate(payload)
        session_id = request.session_id or str(uuid.uuid4())

        prompt = compose_prompt(request.message, request.lang)
        reply = self.gateway.generate(prompt)
        if not reply or not reply.strip():
            reply = FALLBACK_REPLY

        record = ExchangeRecord(
            session_id=session_id,
            user_message=request.message,
            bot_reply=reply,
            language=request.lang,
            metadata=metadata or ExchangeMetadata()
        )
        if schedule is None:
            self.persist(record)
        else:
            schedule(self.persist, record)

        logger.info("chat_relayed", session_id=session_id, language=request.lang)
        return ChatResponse(reply=reply, session_id=session_id)

    def persist(self, record: ExchangeRecord) -> None:
        """Hand the exchange to the store. Never raises."""
        try:
            self.store.record(record)
        except Exception:
            logger.exception("persistence_failed", session_id=record.session_id)


# Singleton instance
_relay_service: Optional[RelayService] = None


def get_relay_service() -> RelayService:
    """Get or create the relay service singleton"""
    global _relay_service
    if _relay_service is None:
        _relay_service = RelayService(get_generation_gateway(), get_conversation_store())
    return _relay_service
