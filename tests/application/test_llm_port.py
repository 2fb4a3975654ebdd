import pytest

from guest_assistant.application.ports.llm_port import ChatMessage, LLMPort, LLMResponse


class _EchoLLM(LLMPort):
    async def chat(self, messages, temperature=0.2, max_tokens=250):
        joined = " | ".join(f"{m.role}:{m.content}" for m in messages)
        return LLMResponse(text=f"{joined} t={temperature} m={max_tokens}")


@pytest.mark.asyncio
async def test_generate_wraps_system_and_user_messages():
    out = await _EchoLLM().generate("be brief", "hello", temperature=0.1, max_tokens=42)
    assert out == "system:be brief | user:hello t=0.1 m=42"


def test_chat_message_is_frozen():
    msg = ChatMessage(role="user", content="x")
    with pytest.raises(AttributeError):
        msg.content = "y"  # type: ignore[misc]
