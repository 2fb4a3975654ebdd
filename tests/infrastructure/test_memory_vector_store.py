import math

import pytest

from guest_assistant.domain.errors import VectorStoreError
from guest_assistant.domain.models import Chunk
from guest_assistant.infrastructure.vectorstore.memory_vector_store import InMemoryVectorStore

CHUNKS = [
    Chunk(id=0, text="hours", metadata={"source": "hours.txt"}),
    Chunk(id=1, text="parking", metadata={"source": "parking.txt"}),
    Chunk(id=2, text="food", metadata={"source": "food.txt"}),
]
VECTORS = [[1.0, 0.0, 0.0], [0.0, 2.0, 0.0], [1.0, 1.0, 0.0]]


async def _filled() -> InMemoryVectorStore:
    store = InMemoryVectorStore()
    await store.ensure_collection("guest_docs", dim=3)
    await store.upsert(CHUNKS, VECTORS)
    return store


@pytest.mark.asyncio
async def test_search_returns_cosine_distance_nearest_first():
    store = await _filled()
    hits = await store.search([0.0, 5.0, 0.0], top_k=3)
    assert [h.chunk.id for h in hits] == [1, 2, 0]
    assert hits[0].distance == pytest.approx(0.0, abs=1e-6)
    assert hits[1].distance == pytest.approx(1 - 1 / math.sqrt(2), abs=1e-6)
    assert hits[2].distance == pytest.approx(1.0, abs=1e-6)


@pytest.mark.asyncio
async def test_top_k_caps_results_and_count():
    store = await _filled()
    assert len(await store.search([1.0, 0.0, 0.0], top_k=2)) == 2
    assert len(await store.search([1.0, 0.0, 0.0], top_k=10)) == 3
    assert store.count() == 3


@pytest.mark.asyncio
async def test_opposite_vector_distance_is_clamped_to_non_negative():
    store = await _filled()
    hits = await store.search([-1.0, 0.0, 0.0], top_k=3)
    assert all(h.distance >= 0.0 for h in hits)


@pytest.mark.asyncio
async def test_empty_store_returns_nothing():
    store = InMemoryVectorStore()
    await store.ensure_collection("c", dim=3)
    assert await store.search([1.0, 0.0, 0.0]) == []


@pytest.mark.asyncio
async def test_ensure_collection_resets_contents():
    store = await _filled()
    await store.ensure_collection("fresh", dim=3)
    assert store.count() == 0
    assert store.collection == "fresh"


@pytest.mark.asyncio
async def test_errors_are_domain_errors():
    store = InMemoryVectorStore()
    with pytest.raises(VectorStoreError):
        await store.search([1.0])
    with pytest.raises(VectorStoreError):
        await store.upsert(CHUNKS, VECTORS)

    await store.ensure_collection("c", dim=3)
    with pytest.raises(VectorStoreError):
        await store.upsert(CHUNKS, VECTORS[:2])
    with pytest.raises(VectorStoreError):
        await store.upsert(CHUNKS[:1], [[1.0, 0.0]])
    with pytest.raises(VectorStoreError):
        await store.ensure_collection("c", dim=0)
