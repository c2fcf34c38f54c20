import pytest
import requests

from agroscan.models.schemas import ChatTurn, MessageRole
from agroscan.services import advisor_service
from agroscan.services.advisor_service import (
    CHAT_FALLBACK,
    RECOMMEND_FALLBACK,
    build_chat_prompt,
    build_recommendation_prompt,
    recommend,
    respond
)
from agroscan.services.commands import COMMANDS
from agroscan.services.prompts import AI_PERSONALITY


class RecordingCompletion:
    def __init__(self, answer="  Water in the early morning.  "):
        self.answer = answer
        self.calls = []

    def __call__(self, prompt, max_tokens=100):
        self.calls.append((prompt, max_tokens))
        return self.answer


def failing_completion(prompt, max_tokens=100):
    raise requests.exceptions.ConnectionError("network down")


def make_history(count):
    turns = []
    for i in range(count):
        role = MessageRole.USER if i % 2 == 0 else MessageRole.ASSISTANT
        turns.append(ChatTurn(role=role, content=f"turn {i}"))
    return turns


def test_command_short_circuits_completion():
    completion = RecordingCompletion()
    assert respond(make_history(3), "  HELP ", completion=completion) == COMMANDS["help"]
    assert completion.calls == []


def test_custom_command_table_is_used():
    completion = RecordingCompletion()
    table = {"ping": "pong"}
    assert respond([], "Ping", completion=completion, commands=table) == "pong"
    assert respond([], "help", completion=completion, commands=table) == "Water in the early morning."


def test_answer_is_stripped():
    completion = RecordingCompletion()
    assert respond([], "When should I water beans?", completion=completion) == "Water in the early morning."
    prompt, max_tokens = completion.calls[0]
    assert max_tokens == 100
    assert prompt.rstrip().endswith("AI (reply max 100 tokens, avg ~30 tokens):")


def test_prompt_keeps_last_five_turns_in_order():
    prompt = build_chat_prompt(make_history(8), "What now?")
    lines = prompt.splitlines()

    start = lines.index("Chat History:") + 1
    assert lines[start:start + 6] == [
        "AI: turn 3",
        "User: turn 4",
        "AI: turn 5",
        "User: turn 6",
        "AI: turn 7",
        "User: What now?",
    ]
    for i in range(3):
        assert f"turn {i}" not in prompt


def test_prompt_starts_with_personality():
    prompt = build_chat_prompt([], "hello there")
    assert prompt.startswith(AI_PERSONALITY)
    assert "User: hello there" in prompt


def test_short_history_is_kept_whole():
    prompt = build_chat_prompt(make_history(2), "next")
    assert "User: turn 0\nAI: turn 1\nUser: next" in prompt


@pytest.mark.parametrize("completion", [
    failing_completion,
    RecordingCompletion(answer=""),
    RecordingCompletion(answer="   "),
    RecordingCompletion(answer=None),
])
def test_chat_failures_collapse_to_fallback(completion):
    assert respond([], "How deep should I plant garlic?", completion=completion) == CHAT_FALLBACK


def test_chat_uses_perplexity_by_default(monkeypatch):
    completion = RecordingCompletion()
    monkeypatch.setattr(advisor_service, "call_perplexity", completion)
    assert respond([], "Is it too late to sow rice?") == "Water in the early morning."
    assert len(completion.calls) == 1


def test_recommendation_prompt_embeds_readings():
    prompt = build_recommendation_prompt(6.2, 41, 27.5, "tomato")
    assert "- pH: 6.2" in prompt
    assert "- Moisture: 41" in prompt
    assert "- Temperature: 27.5" in prompt
    assert "- Desired Crop: tomato" in prompt


def test_recommendation_prompt_defaults():
    prompt = build_recommendation_prompt(6.2, 41)
    assert "- Desired Crop: any suitable crop" in prompt
    assert "- Temperature: not provided" in prompt


def test_recommend_skips_command_table():
    completion = RecordingCompletion()
    assert recommend(6.5, 50, 25, "help", completion=completion) == "Water in the early morning."
    assert len(completion.calls) == 1


@pytest.mark.parametrize("completion", [failing_completion, RecordingCompletion(answer="")])
def test_recommend_failures_collapse_to_fallback(completion):
    assert recommend(6.5, 50, completion=completion) == RECOMMEND_FALLBACK
