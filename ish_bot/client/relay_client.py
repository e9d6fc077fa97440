"""
HTTP transport from the chat client to the relay API
"""
from typing import Any, Dict, Optional

import requests

from ish_bot.config import Config
from ish_bot.logging_config import get_logger

logger = get_logger("ish-client")


class NetworkFailure(Exception):
    """The relay could not be reached or did not answer with a 2xx JSON body"""


class RelayClient:
    """Posts chat messages to the relay's /chat endpoint"""

    def __init__(self, base_url: str = None, timeout: float = None, session: requests.Session = None):
        self.base_url = (base_url or Config.RELAY_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else Config.RELAY_TIMEOUT_SECONDS
        self.http = session or requests.Session()

    @property
    def chat_url(self) -> str:
        return f"{self.base_url}/chat"

    def send(self, message: str, lang: str, session_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Send one message to the relay.

        Returns:
            The decoded JSON response body

        Raises:
            NetworkFailure: On connection errors, timeouts, non-2xx status or a non-object body
        """
        payload = {"message": message, "lang": lang}
        if session_id:
            payload["session_id"] = session_id

        try:
            response = self.http.post(self.chat_url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except requests.exceptions.RequestException as e:
            # Timeouts, connection errors, HTTP errors and invalid JSON all land here
            raise NetworkFailure(str(e)) from e
        except ValueError as e:
            raise NetworkFailure(f"Invalid JSON from relay: {e}") from e

        if not isinstance(body, dict):
            raise NetworkFailure("Relay response was not a JSON object")
        return body
