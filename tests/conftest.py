from __future__ import annotations

import pytest

from dataflow_ai.llm.base import TextTransport
from dataflow_ai.llm.credentials import CredentialPool
from dataflow_ai.llm.retry import GenerationClient
from dataflow_ai.models.generation import GenerationConfig

SAMPLE_DIAGRAM = (
    "erDiagram\n"
    "    User {\n"
    "        string id PK\n"
    "        string name\n"
    "    }\n"
    "    Order {\n"
    "        string id PK\n"
    "    }\n"
    '    User ||--o{ Order : "places"\n'
)


class ScriptedTransport(TextTransport):
    """Replays a fixed sequence of texts or exceptions, recording each call."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls: list[tuple[str, str]] = []

    def send(self, prompt: str, config: GenerationConfig, credential: str) -> str:
        self.calls.append((prompt, credential))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def sample_diagram() -> str:
    return SAMPLE_DIAGRAM


@pytest.fixture
def make_client():
    def _make(outcomes, *, keys=("key-a", "key-b", "key-c"), max_attempts=3):
        transport = ScriptedTransport(outcomes)
        client = GenerationClient(
            transport,
            CredentialPool(list(keys)),
            max_attempts=max_attempts,
        )
        return client, transport

    return _make
