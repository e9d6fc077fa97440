"""
Client-side registry of chat sessions
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from ish_bot.logging_config import get_logger
from ish_bot.models import Message, utc_now

logger = get_logger("ish-client")

DEFAULT_LANGUAGE = "en"

SUPPORTED_LANGUAGES = {
    "en": "English",
    "hi": "हिन्दी",
    "bn": "বাংলা",
    "mr": "मराठी",
    "ta": "தமிழ்",
    "te": "తెలుగు",
}

WELCOME_MESSAGES = {
    "en": "Hello! I'm ISH, your health assistant. How can I help you today?",
    "hi": "नमस्ते! मैं ISH हूँ, आपका स्वास्थ्य सहायक। आज मैं आपकी कैसे मदद कर सकता हूँ?",
    "bn": "নমস্কার! আমি ISH, আপনার স্বাস্থ্য সহায়ক। আজ আমি আপনাকে কীভাবে সাহায্য করতে পারি?",
    "mr": "नमस्कार! मी ISH, तुमचा आरोग्य सहाय्यक. आज मी तुम्हाला कशी मदत करू शकतो?",
    "ta": "வணக்கம்! நான் ISH, உங்கள் சுகாதார உதவியாளர். இன்று நான் உங்களுக்கு எப்படி உதவ முடியும்?",
    "te": "నమస్కారం! నేను ISH, మీ ఆరోగ్య సహాయకుడిని. ఈ రోజు నేను మీకు ఎలా సహాయం చేయగలను?",
}


def welcome_message(language: str) -> str:
    return WELCOME_MESSAGES.get(language, WELCOME_MESSAGES[DEFAULT_LANGUAGE])


@dataclass
class Session:
    """One conversation thread. Messages can only be appended."""
    title: str
    language: str = DEFAULT_LANGUAGE
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=utc_now)
    _messages: List[Message] = field(default_factory=list, repr=False)

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def append(self, message: Message) -> Message:
        # Keep timestamps non-decreasing even if the wall clock steps back
        if self._messages and message.timestamp < self._messages[-1].timestamp:
            message = message.model_copy(update={"timestamp": self._messages[-1].timestamp})
        self._messages.append(message)
        return message


class SessionRegistry:
    """Owns every session and tracks which one is active"""

    def __init__(self, language: str = DEFAULT_LANGUAGE):
        self.language = language
        self._sessions: Dict[str, Session] = {}
        self._active_id: Optional[str] = None

    @property
    def sessions(self) -> List[Session]:
        return list(self._sessions.values())

    @property
    def active_session(self) -> Optional[Session]:
        if self._active_id is None:
            return None
        return self._sessions[self._active_id]

    def get(self, session_id: str) -> Session:
        """
        Raises:
            KeyError: If no session has this id
        """
        return self._sessions[session_id]

    def create_session(self, language: str = None) -> Session:
        """Start a new session seeded with a welcome message and make it active"""
        language = language or self.language
        session = Session(title=f"Chat {len(self._sessions) + 1}", language=language)
        session.append(Message.from_bot(welcome_message(language)))

        self._sessions[session.id] = session
        self._active_id = session.id
        logger.info("session_created", session_id=session.id, language=language)
        return session

    def select_session(self, session_id: str) -> Session:
        session = self.get(session_id)
        self._active_id = session.id
        return session

    def select_language(self, language: str) -> None:
        """Use this language for new sessions and for the active session's next sends"""
        self.language = language
        if self.active_session is not None:
            self.active_session.language = language

    def append_message(self, session_id: str, message: Message) -> Message:
        return self.get(session_id).append(message)
