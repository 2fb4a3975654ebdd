import sys
import types
from types import SimpleNamespace

import pytest

from guest_assistant.application.ports.llm_port import ChatMessage
from guest_assistant.domain.errors import EmbeddingError, LLMError
from guest_assistant.infrastructure.embeddings.openai_embeddings import OpenAIEmbeddingAdapter
from guest_assistant.infrastructure.llm.openai_chat_adapter import OpenAIChatAdapter


class _FakeCompletions:
    def __init__(self, content="Open at 9 [1].", fail=False):
        self.content = content
        self.fail = fail
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self.fail:
            raise TimeoutError("read timed out")
        choice = SimpleNamespace(message=SimpleNamespace(content=self.content), finish_reason="stop")
        return SimpleNamespace(choices=[choice], usage=SimpleNamespace(total_tokens=42))


class _FakeEmbeddings:
    def __init__(self):
        self.batches = []

    async def create(self, model, input):
        self.batches.append(list(input))
        # returned out of order on purpose
        data = [SimpleNamespace(index=i, embedding=[float(len(t)), 1.0]) for i, t in enumerate(input)]
        return SimpleNamespace(data=list(reversed(data)))


@pytest.mark.asyncio
async def test_chat_adapter_maps_response():
    adapter = OpenAIChatAdapter(model="gpt-4o-mini")
    completions = _FakeCompletions()
    adapter._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))

    resp = await adapter.chat(
        [ChatMessage(role="system", content="s"), ChatMessage(role="user", content="u")],
        temperature=0.2,
        max_tokens=250,
    )
    assert resp.text == "Open at 9 [1]."
    assert resp.usage_tokens == 42
    assert completions.kwargs["model"] == "gpt-4o-mini"
    assert completions.kwargs["messages"] == [
        {"role": "system", "content": "s"},
        {"role": "user", "content": "u"},
    ]
    assert completions.kwargs["max_tokens"] == 250


@pytest.mark.asyncio
async def test_chat_adapter_generate_uses_chat():
    adapter = OpenAIChatAdapter()
    adapter._client = SimpleNamespace(chat=SimpleNamespace(completions=_FakeCompletions("hi")))
    assert await adapter.generate("sys", "prompt") == "hi"


@pytest.mark.asyncio
async def test_chat_adapter_wraps_errors():
    adapter = OpenAIChatAdapter()
    adapter._client = SimpleNamespace(chat=SimpleNamespace(completions=_FakeCompletions(fail=True)))
    with pytest.raises(LLMError):
        await adapter.chat([ChatMessage(role="user", content="u")])


@pytest.mark.asyncio
async def test_chat_adapter_builds_client_lazily(monkeypatch):
    created = {}

    class _AsyncOpenAI:
        def __init__(self, base_url=None, api_key=None):
            created.update(base_url=base_url, api_key=api_key)
            self.chat = SimpleNamespace(completions=_FakeCompletions("ok"))

    module = types.ModuleType("openai")
    module.AsyncOpenAI = _AsyncOpenAI
    monkeypatch.setitem(sys.modules, "openai", module)

    adapter = OpenAIChatAdapter(base_url="http://localhost:8000/v1", api_key="k")
    resp = await adapter.chat([ChatMessage(role="user", content="u")])
    assert resp.text == "ok"
    assert created == {"base_url": "http://localhost:8000/v1", "api_key": "k"}


@pytest.mark.asyncio
async def test_embedding_adapter_batches_and_restores_order():
    adapter = OpenAIEmbeddingAdapter(batch_size=2)
    embeddings = _FakeEmbeddings()
    adapter._client = SimpleNamespace(embeddings=embeddings)

    vectors = await adapter.embed_texts(["a", "bb", "ccc"])
    assert embeddings.batches == [["a", "bb"], ["ccc"]]
    assert vectors == [[1.0, 1.0], [2.0, 1.0], [3.0, 1.0]]
    assert await adapter.embed_query("dddd") == [4.0, 1.0]


@pytest.mark.asyncio
async def test_embedding_adapter_wraps_errors():
    class _Broken:
        async def create(self, model, input):
            raise ConnectionError("refused")

    adapter = OpenAIEmbeddingAdapter()
    adapter._client = SimpleNamespace(embeddings=_Broken())
    with pytest.raises(EmbeddingError, match="refused"):
        await adapter.embed_query("x")
