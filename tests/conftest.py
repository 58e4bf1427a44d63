from contextlib import contextmanager
from types import SimpleNamespace
from typing import Any, Optional

import pytest
from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from langchain_core.messages import AIMessage

from shared import retrieval
from shared.settings import VectorStoreSettings


class FakeEmbeddings(Embeddings):
    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [[float(len(t)), 1.0] for t in texts]

    def embed_query(self, text: str) -> list[float]:
        return [float(len(text)), 1.0]


class FakeVectorStore:
    """Stands in for ElasticsearchStore / PineconeVectorStore / MongoDBAtlasVectorSearch."""

    instances: list["FakeVectorStore"] = []

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self.args = args
        self.kwargs = kwargs
        FakeVectorStore.instances.append(self)

    def as_retriever(self, search_kwargs: Optional[dict] = None) -> SimpleNamespace:
        return SimpleNamespace(vectorstore=self, search_kwargs=search_kwargs)


class FakeMongoDatabase:
    def __init__(self, client: "FakeMongoClient", name: str) -> None:
        self.client = client
        self.name = name

    def __getitem__(self, collection_name: str) -> SimpleNamespace:
        return SimpleNamespace(client=self.client, database=self.name, name=collection_name)


class FakeMongoClient:
    """Stands in for pymongo.MongoClient."""

    def __init__(self, uri: str, **kwargs: Any) -> None:
        self.uri = uri

    def __getitem__(self, db_name: str) -> FakeMongoDatabase:
        return FakeMongoDatabase(self, db_name)


class FakeRetriever:
    def __init__(
        self,
        docs: Optional[list[Document]] = None,
        fail_on_add: Optional[BaseException] = None,
        fail_on_query: Optional[BaseException] = None,
    ):
        self.docs = docs or []
        self.fail_on_add = fail_on_add
        self.fail_on_query = fail_on_query
        self.queries: list[str] = []
        self.added: list[Document] = []

    async def ainvoke(self, query: str, config: Any = None) -> list[Document]:
        self.queries.append(query)
        if self.fail_on_query is not None:
            raise self.fail_on_query
        return list(self.docs)

    async def aadd_documents(self, documents: list[Document]) -> list[str]:
        if self.fail_on_add is not None:
            raise self.fail_on_add
        self.added.extend(documents)
        return [doc.id for doc in documents]


class FakeStructuredModel:
    def __init__(self, parent: "FakeChatModel", schema: Any):
        self.parent = parent
        self.schema = schema

    async def ainvoke(self, messages: Any, config: Any = None) -> dict[str, str]:
        self.parent.calls.append(messages)
        return {"query": self.parent.query}


class FakeChatModel:
    def __init__(self, answer: str = "The answer.", query: str = "rewritten query"):
        self.answer = answer
        self.query = query
        self.calls: list[Any] = []

    def with_structured_output(self, schema: Any) -> FakeStructuredModel:
        return FakeStructuredModel(self, schema)

    async def ainvoke(self, messages: Any, config: Any = None) -> AIMessage:
        self.calls.append(messages)
        return AIMessage(content=self.answer)


@pytest.fixture
def fake_store(monkeypatch: pytest.MonkeyPatch) -> type[FakeVectorStore]:
    import langchain_elasticsearch
    import langchain_mongodb.vectorstores
    import langchain_pinecone
    import pymongo

    FakeVectorStore.instances = []
    monkeypatch.setattr(langchain_elasticsearch, "ElasticsearchStore", FakeVectorStore)
    monkeypatch.setattr(langchain_pinecone, "PineconeVectorStore", FakeVectorStore)
    monkeypatch.setattr(
        langchain_mongodb.vectorstores, "MongoDBAtlasVectorSearch", FakeVectorStore
    )
    monkeypatch.setattr(pymongo, "MongoClient", FakeMongoClient)
    return FakeVectorStore


@pytest.fixture
def settings() -> VectorStoreSettings:
    return VectorStoreSettings(
        elasticsearch_url="http://localhost:9200",
        elasticsearch_api_key="es-key",
        elasticsearch_user="elastic",
        elasticsearch_password="changeme",
        pinecone_index_name="test-index",
        pinecone_api_key="pc-key",
        mongodb_uri="mongodb://localhost:27017",
        mongodb_index_name="vector_index",
        elasticsearch_index_name="langchain_index",
        _env_file=None,
    )


@pytest.fixture
def embeddings() -> FakeEmbeddings:
    return FakeEmbeddings()


@pytest.fixture
def fake_retriever(monkeypatch: pytest.MonkeyPatch) -> FakeRetriever:
    """Replace make_retriever with one that yields a single shared FakeRetriever."""
    fake = FakeRetriever()
    configs: list[Any] = []

    @contextmanager
    def _make_retriever(config: Any, **kwargs: Any):
        configs.append(config)
        yield fake

    monkeypatch.setattr(retrieval, "make_retriever", _make_retriever)
    fake.configs = configs  # type: ignore[attr-defined]
    return fake


@pytest.fixture
def fake_chat_model() -> FakeChatModel:
    return FakeChatModel()
