import dataclasses
import json
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from services.completion_client import Completion

VALID_CONTENT = json.dumps(
    {
        "explanation": "経験から距離感、任意の自由記述へと進む構成です。",
        "questions": [
            {
                "number": 1,
                "title": "最近の利用",
                "text": "この1年で図書館に行ったことはありますか？",
                "type": "choice",
                "options": ["よく行く", "たまに行く", "行っていない"],
            },
            {
                "number": 2,
                "title": "距離感",
                "text": "図書館は生活の中でどのくらい近い場所ですか？",
                "type": "choice",
                "options": ["近い", "少し遠い", "遠い"],
            },
            {
                "number": 3,
                "title": "きっかけ（任意）",
                "text": "行きたくなるきっかけがあれば教えてください\n（書かなくても大丈夫です）",
                "type": "text",
            },
        ],
        "note": "※ この問いは、意見を評価するためのものではありません。",
    },
    ensure_ascii=False,
)


class StubCompletionClient:
    """Records calls and replays a fixed completion or error."""

    def __init__(self, content: str = VALID_CONTENT, error: Optional[Exception] = None):
        self.content = content
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def complete(self, system_prompt: str, user_prompt: str) -> Completion:
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return Completion(content=self.content, model="stub-model", total_tokens=321)


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="test-key", rate_limit_short_max=5, rate_limit_long_max=50)


@pytest.fixture
def stub_client() -> StubCompletionClient:
    return StubCompletionClient()


@pytest.fixture
def client(settings, stub_client) -> TestClient:
    return TestClient(create_app(settings=settings, completion_client=stub_client))


@pytest.fixture
def structured_logs(caplog):
    """Decode structured request-log records captured by caplog."""
    caplog.set_level("INFO")

    def _records(record_type: Optional[str] = None) -> list[dict]:
        records = []
        for record in caplog.records:
            if record.name != "services.request_logger":
                continue
            data = json.loads(record.getMessage())
            if record_type is None or data["type"] == record_type:
                records.append(data)
        return records

    return _records


@pytest.fixture
def make_client(settings):
    """Build a TestClient around a stub returning the given content or error."""

    def _make(content: str = VALID_CONTENT, error: Optional[Exception] = None, **overrides):
        stub = StubCompletionClient(content=content, error=error)
        app_settings = dataclasses.replace(settings, **overrides)
        return TestClient(create_app(settings=app_settings, completion_client=stub)), stub

    return _make
