"""
Pytest fixtures and configuration
"""
import logging
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from ish_bot.main import app
from ish_bot.services import (
    GenerationGateway,
    InMemoryConversationStore,
    LLMService,
    RelayService,
    get_relay_service,
)


@pytest.fixture
def mock_llm():
    """LLM service stub answering every prompt with a fixed reply"""
    llm = Mock(spec=LLMService)
    llm.get_completion.return_value = "Wash hands, stay hydrated..."
    return llm


@pytest.fixture
def memory_store():
    return InMemoryConversationStore()


@pytest.fixture
def relay_service(mock_llm, memory_store):
    return RelayService(GenerationGateway(mock_llm), memory_store)


@pytest.fixture
def client(relay_service):
    """Test client for the FastAPI app with fake generation and storage"""
    app.dependency_overrides[get_relay_service] = lambda: relay_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_redis(monkeypatch):
    """Mock Redis for testing without actual Redis"""

    class MockRedis:
        instances = []

        def __init__(self, *args, **kwargs):
            self.kwargs = kwargs
            self.lists = {}
            MockRedis.instances.append(self)

        def ping(self):
            return True

        def rpush(self, key, *values):
            self.lists.setdefault(key, []).extend(values)
            return len(self.lists[key])

    import redis
    monkeypatch.setattr(redis, "Redis", MockRedis)
    MockRedis.instances = []
    return MockRedis


@pytest.fixture
def generation_env(monkeypatch):
    """Pretend Azure OpenAI is configured"""
    from ish_bot.config import Config

    monkeypatch.setattr(Config, "AZURE_OPENAI_ENDPOINT", "https://test-endpoint.openai.azure.com")
    monkeypatch.setattr(Config, "AZURE_OPENAI_KEY", "test-key-12345")


class RecordingHandler(logging.Handler):
    """Keeps emitted records in memory"""

    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def capture_logs():
    """Attach an in-memory handler to a StructuredLogger, returns its record list"""
    attached = []

    def attach(structured_logger):
        handler = RecordingHandler()
        structured_logger.logger.addHandler(handler)
        attached.append((structured_logger, handler))
        return handler.records

    yield attach
    for structured_logger, handler in attached:
        structured_logger.logger.removeHandler(handler)


@pytest.fixture
def api_log_records(capture_logs):
    """Records logged by the API module"""
    from ish_bot import main

    return capture_logs(main.logger)
