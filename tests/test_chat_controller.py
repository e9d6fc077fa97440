"""
Unit tests for the client chat controller
"""
import asyncio
import threading

import pytest

from ish_bot.client import (
    CONNECTION_FALLBACK,
    EMPTY_REPLY_FALLBACK,
    ChatController,
    NetworkFailure,
    SessionRegistry,
)
from ish_bot.models import Origin


class FakeRelayClient:
    """Records calls and answers with a canned body or error"""

    def __init__(self, body=None, error=None):
        self.body = body if body is not None else {"reply": "Drink boiled water.", "status": "success"}
        self.error = error
        self.calls = []
        self.typing_during_call = None
        self.controller = None

    def send(self, message, lang, session_id=None):
        self.calls.append((message, lang, session_id))
        if self.controller is not None:
            self.typing_during_call = self.controller.is_typing
        if self.error is not None:
            raise self.error
        return self.body


class BlockingRelayClient(FakeRelayClient):
    """Holds the reply until released so tests can act mid-flight"""

    def __init__(self):
        super().__init__()
        self.started = threading.Event()
        self.release = threading.Event()

    def send(self, message, lang, session_id=None):
        self.calls.append((message, lang, session_id))
        self.started.set()
        self.release.wait(5)
        return {"reply": f"reply to {message}"}


@pytest.fixture
def registry():
    registry = SessionRegistry()
    registry.create_session("en")
    return registry


def make_controller(registry, relay_client):
    controller = ChatController(registry, relay_client)
    relay_client.controller = controller
    return controller


class TestSend:

    @pytest.mark.unit
    def test_success_appends_user_then_bot(self, registry):
        relay = FakeRelayClient()
        controller = make_controller(registry, relay)
        session = registry.active_session

        bot_message = asyncio.run(controller.send("  Is tap water safe?  "))

        contents = [(m.origin, m.content) for m in session.messages]
        assert contents[1:] == [
            (Origin.USER, "Is tap water safe?"),
            (Origin.BOT, "Drink boiled water."),
        ]
        assert bot_message is session.messages[-1]
        assert relay.calls == [("Is tap water safe?", "en", session.id)]

    @pytest.mark.unit
    def test_uses_and_clears_input_text(self, registry):
        relay = FakeRelayClient()
        controller = make_controller(registry, relay)
        controller.input_text = "hello"

        asyncio.run(controller.send())

        assert controller.input_text == ""
        assert relay.calls[0][0] == "hello"

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_blank_input_is_ignored(self, registry, text):
        relay = FakeRelayClient()
        controller = make_controller(registry, relay)

        result = asyncio.run(controller.send(text))

        assert result is None
        assert relay.calls == []
        assert len(registry.active_session.messages) == 1

    @pytest.mark.unit
    def test_no_active_session_is_ignored(self):
        relay = FakeRelayClient()
        controller = make_controller(SessionRegistry(), relay)

        assert asyncio.run(controller.send("hello")) is None
        assert relay.calls == []

    @pytest.mark.unit
    def test_sends_session_language(self, registry):
        relay = FakeRelayClient()
        controller = make_controller(registry, relay)
        registry.select_language("mr")

        asyncio.run(controller.send("ताप"))

        assert relay.calls[0][1] == "mr"


class TestFallbacks:

    @pytest.mark.unit
    @pytest.mark.parametrize("body", [{"status": "success"}, {"reply": ""}, {"reply": "   "}, {"reply": None}])
    def test_empty_reply_uses_fallback(self, registry, body):
        controller = make_controller(registry, FakeRelayClient(body=body))

        message = asyncio.run(controller.send("hello"))

        assert message.content == EMPTY_REPLY_FALLBACK
        assert message.origin == Origin.BOT

    @pytest.mark.unit
    @pytest.mark.parametrize("error", [NetworkFailure("503 Server Error"), RuntimeError("boom")])
    def test_transport_failure_uses_connection_fallback(self, registry, error):
        controller = make_controller(registry, FakeRelayClient(error=error))

        message = asyncio.run(controller.send("hello"))

        assert message.content == CONNECTION_FALLBACK
        assert [m.origin for m in registry.active_session.messages] == [Origin.BOT, Origin.USER, Origin.BOT]


class TestInFlightFlag:

    @pytest.mark.unit
    def test_flag_set_during_call_and_cleared_after(self, registry):
        relay = FakeRelayClient()
        controller = make_controller(registry, relay)

        asyncio.run(controller.send("hello"))

        assert relay.typing_during_call is True
        assert controller.is_typing is False

    @pytest.mark.unit
    def test_flag_cleared_after_failure(self, registry):
        relay = FakeRelayClient(error=NetworkFailure("refused"))
        controller = make_controller(registry, relay)

        asyncio.run(controller.send("hello"))

        assert relay.typing_during_call is True
        assert controller.is_typing is False

    @pytest.mark.unit
    def test_flag_cleared_when_append_raises(self, registry, monkeypatch):
        controller = make_controller(registry, FakeRelayClient())
        original_append = registry.append_message

        def failing_append(session_id, message):
            if message.origin == Origin.BOT:
                raise RuntimeError("render failed")
            return original_append(session_id, message)

        monkeypatch.setattr(registry, "append_message", failing_append)

        with pytest.raises(RuntimeError):
            asyncio.run(controller.send("hello"))
        assert controller.is_typing is False
        assert not controller.is_in_flight(registry.active_session.id)


class TestConcurrentSessions:

    @pytest.mark.unit
    def test_reply_lands_in_originating_session(self, registry):
        relay = BlockingRelayClient()
        controller = make_controller(registry, relay)
        origin = registry.active_session

        async def scenario():
            task = asyncio.create_task(controller.send("first question"))
            await asyncio.to_thread(relay.started.wait, 5)
            newer = registry.create_session()
            assert controller.is_typing is False
            relay.release.set()
            await task
            return newer

        newer = asyncio.run(scenario())

        assert origin.messages[-1].content == "reply to first question"
        assert len(newer.messages) == 1
        assert not controller.is_in_flight(origin.id)

    @pytest.mark.unit
    def test_second_send_on_busy_session_is_ignored(self, registry):
        relay = BlockingRelayClient()
        controller = make_controller(registry, relay)
        session = registry.active_session

        async def scenario():
            task = asyncio.create_task(controller.send("first"))
            await asyncio.to_thread(relay.started.wait, 5)
            assert controller.is_typing is True
            ignored = await controller.send("second")
            relay.release.set()
            await task
            return ignored

        assert asyncio.run(scenario()) is None
        assert [m.content for m in session.messages[1:]] == ["first", "reply to first"]
        assert len(relay.calls) == 1
