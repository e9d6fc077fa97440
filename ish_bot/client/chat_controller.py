"""
Chat Controller - drives the send/await/append cycle for chat sessions
"""
import asyncio
from typing import Optional, Set

from ish_bot.client.relay_client import RelayClient
from ish_bot.client.session_registry import SessionRegistry
from ish_bot.logging_config import get_logger
from ish_bot.models import Message

logger = get_logger("ish-client")

EMPTY_REPLY_FALLBACK = "Sorry, I could not process your request. Please try again."
CONNECTION_FALLBACK = "I'm having trouble connecting to the server. Please check your connection and try again."


class ChatController:
    """
    Sends user input for the active session and appends the bot reply.

    Each session has at most one message in flight. The reply is always
    appended to the session that sent the message, even if the user has
    switched to another session meanwhile.
    """

    def __init__(self, registry: SessionRegistry, relay_client: RelayClient):
        self.registry = registry
        self.relay_client = relay_client
        self.input_text = ""
        self._in_flight: Set[str] = set()

    @property
    def is_typing(self) -> bool:
        """True while the active session waits for a reply"""
        session = self.registry.active_session
        return session is not None and session.id in self._in_flight

    def is_in_flight(self, session_id: str) -> bool:
        return session_id in self._in_flight

    async def send(self, text: Optional[str] = None) -> Optional[Message]:
        """
        Send text (or the current input) on the active session.

        Returns:
            The appended bot message, or None when nothing was sent
        """
        content = (self.input_text if text is None else text).strip()
        session = self.registry.active_session
        if not content or session is None:
            return None
        if session.id in self._in_flight:
            logger.info("send_ignored_in_flight", session_id=session.id)
            return None

        session_id, language = session.id, session.language
        self.registry.append_message(session_id, Message.from_user(content))
        self.input_text = ""
        self._in_flight.add(session_id)

        try:
            reply = await self._request_reply(content, language, session_id)
            return self.registry.append_message(session_id, Message.from_bot(reply))
        finally:
            self._in_flight.discard(session_id)

    async def _request_reply(self, content: str, language: str, session_id: str) -> str:
        try:
            body = await asyncio.to_thread(self.relay_client.send, content, language, session_id)
        except Exception as e:
            logger.warning("relay_request_failed", session_id=session_id,
                           error_type=type(e).__name__, error=str(e))
            return CONNECTION_FALLBACK

        reply = body.get("reply") if isinstance(body, dict) else None
        if not isinstance(reply, str) or not reply.strip():
            logger.warning("relay_reply_empty", session_id=session_id)
            return EMPTY_REPLY_FALLBACK
        return reply
