import asyncio

import pytest
from langchain_core.documents import Document

from index_graph.graph import ensure_docs_have_user_id, graph, index_docs
from index_graph.state import IndexState
from shared.errors import MissingTenantError

CONFIG = {"configurable": {"user_id": "u1"}}


def test_ensure_docs_have_user_id_overwrites_caller_value() -> None:
    doc = Document(page_content="a", metadata={"id": "1", "user_id": "spoofed"}, id="1")
    (stamped,) = ensure_docs_have_user_id([doc], CONFIG)
    assert stamped.metadata == {"id": "1", "user_id": "u1"}
    assert stamped.id == "1"
    assert doc.metadata["user_id"] == "spoofed"


@pytest.mark.asyncio
async def test_index_docs_requires_config() -> None:
    with pytest.raises(ValueError):
        await index_docs(IndexState(docs=[]), config=None)


@pytest.mark.asyncio
async def test_index_graph_stamps_and_clears(fake_retriever) -> None:
    result = await graph.ainvoke({"docs": ["hello"]}, CONFIG)

    (added,) = fake_retriever.added
    assert added.page_content == "hello"
    assert added.metadata["user_id"] == "u1"
    assert added.metadata["id"] == added.id
    assert result["docs"] == []


@pytest.mark.asyncio
async def test_failed_write_keeps_docs(fake_retriever) -> None:
    fake_retriever.fail_on_add = ConnectionError("store unavailable")
    docs = [Document(page_content="hello", metadata={"id": "1"}, id="1")]
    state = IndexState(docs=docs)

    with pytest.raises(ConnectionError):
        await index_docs(state, config=CONFIG)
    assert state.docs == docs


@pytest.mark.asyncio
async def test_cancelled_write_is_not_cleared(fake_retriever) -> None:
    fake_retriever.fail_on_add = asyncio.CancelledError()
    state = IndexState(docs=[Document(page_content="hello", id="1")])

    with pytest.raises(asyncio.CancelledError):
        await index_docs(state, config=CONFIG)
    assert len(state.docs) == 1


@pytest.mark.asyncio
async def test_index_without_user_id_fails(fake_store) -> None:
    with pytest.raises(MissingTenantError):
        await index_docs(IndexState(docs=[Document(page_content="a")]), config={"configurable": {}})
    assert fake_store.instances == []
