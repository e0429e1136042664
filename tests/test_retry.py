import pytest

from dataflow_ai.errors import (
    MalformedOutputError,
    QuotaExceededError,
    RetryBudgetExhaustedError,
    TransportError,
)
from dataflow_ai.llm.base import TextTransport
from dataflow_ai.llm.retry import JSON_ONLY_DIRECTIVE, GenerationClient, strengthen_prompt
from dataflow_ai.models.generation import GenerationConfig, GenerationRequest


def test_success_on_first_attempt_uses_active_credential(make_client):
    client, transport = make_client(["erDiagram\n    A {\n    }"])

    result = client.generate_text("draw it")

    assert result.startswith("erDiagram")
    assert transport.calls == [("draw it", "key-a")]
    assert client.pool.index == 0


def test_quota_then_success_rotates_exactly_once(make_client):
    client, transport = make_client(
        [QuotaExceededError("quota exceeded", status=429), "hello"]
    )

    result = client.generate(GenerationRequest(prompt="p"))

    assert result == "hello"
    assert client.pool.index == 1
    assert [credential for _, credential in transport.calls] == ["key-a", "key-b"]


def test_quota_on_every_attempt_exhausts_budget(make_client):
    client, transport = make_client(
        [QuotaExceededError("quota") for _ in range(3)]
    )

    with pytest.raises(RetryBudgetExhaustedError) as excinfo:
        client.generate_text("p")

    assert excinfo.value.kind == "exhausted"
    assert excinfo.value.attempts == 3
    assert isinstance(excinfo.value.last_error, QuotaExceededError)
    assert len(transport.calls) == 3


def test_hard_failure_is_not_retried(make_client):
    client, transport = make_client(
        [TransportError("bad request", status=400), "never used"]
    )

    with pytest.raises(TransportError) as excinfo:
        client.generate_text("p")

    assert excinfo.value.attempts == 1
    assert excinfo.value.status == 400
    assert len(transport.calls) == 1
    assert client.pool.index == 0


def test_empty_response_is_retried(make_client):
    client, transport = make_client(["   ", "```\n```", "done"])

    assert client.generate_text("p") == "done"
    assert len(transport.calls) == 3


def test_empty_responses_never_returned(make_client):
    client, _ = make_client(["", " ", "\n"])

    with pytest.raises(RetryBudgetExhaustedError) as excinfo:
        client.generate_text("p")

    assert isinstance(excinfo.value.last_error, MalformedOutputError)


def test_invalid_json_reissues_with_directive(make_client):
    client, transport = make_client(['{"a": ', '```json\n{"a": 1}\n```'])

    result = client.generate_text("give json")

    assert result == '{"a": 1}'
    assert transport.calls[0][0] == "give json"
    assert transport.calls[1][0].startswith("give json")
    assert transport.calls[1][0].endswith(JSON_ONLY_DIRECTIVE)


def test_directive_is_not_compounded(make_client):
    client, transport = make_client(["{bad", "{still bad", '{"ok": true}'])

    client.generate_text("p")

    assert transport.calls[2][0].count(JSON_ONLY_DIRECTIVE) == 1


def test_mixed_failures_share_one_budget(make_client):
    client, transport = make_client(
        [QuotaExceededError("rate limit"), "{broken", "", "unreachable"]
    )

    with pytest.raises(RetryBudgetExhaustedError):
        client.generate_text("p")

    assert len(transport.calls) == 3
    assert transport.outcomes == ["unreachable"]


@pytest.mark.parametrize("max_attempts", [1, 2, 5])
def test_never_exceeds_configured_attempts(make_client, max_attempts):
    outcomes = [QuotaExceededError("quota"), "", "{x"] * 3
    client, transport = make_client(outcomes, max_attempts=max_attempts)

    with pytest.raises(RetryBudgetExhaustedError):
        client.generate_text("p")

    assert len(transport.calls) == max_attempts


def test_non_json_text_is_returned_as_is(make_client):
    client, _ = make_client(["flowchart TD\n    A --> B"])

    assert client.generate_text("p", GenerationConfig(temperature=0.0)) == "flowchart TD\n    A --> B"


def test_strengthen_prompt_is_idempotent():
    once = strengthen_prompt("p")

    assert strengthen_prompt(once) == once


def test_zero_attempt_budget_is_rejected(make_client):
    with pytest.raises(ValueError):
        make_client([], max_attempts=0)


def test_deeply_nested_json_is_retried_as_malformed(make_client):
    client, transport = make_client(['{"a":' + "[" * 200000, '{"a": 1}'])

    result = client.generate_text("p")

    assert result == '{"a": 1}'
    assert transport.calls[1][0].endswith(JSON_ONLY_DIRECTIVE)


def test_deeply_nested_json_exhausts_budget(make_client):
    client, _ = make_client(['{"a":' + "[" * 200000] * 3)

    with pytest.raises(RetryBudgetExhaustedError) as excinfo:
        client.generate_text("p")

    assert isinstance(excinfo.value.last_error, MalformedOutputError)


class _SharedPoolTransport(TextTransport):
    """Lets a second client hit quota on the same key before the first one reports it."""

    def __init__(self, other_client):
        self.other_client = other_client
        self.calls = []

    def send(self, prompt, config, credential):
        self.calls.append(credential)
        if len(self.calls) == 1:
            self.other_client.generate_text("other")
            raise QuotaExceededError("quota", status=429)
        return "done"


def test_quota_on_same_credential_from_two_clients_rotates_once(make_client):
    other, other_transport = make_client(
        [QuotaExceededError("quota", status=429), "other done"]
    )
    transport = _SharedPoolTransport(other)
    client = GenerationClient(transport, other.pool)

    assert client.generate_text("p") == "done"
    assert [credential for _, credential in other_transport.calls] == ["key-a", "key-b"]
    assert transport.calls == ["key-a", "key-b"]
    assert client.pool.index == 1
