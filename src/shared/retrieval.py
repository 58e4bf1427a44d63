"""Manage the configuration of various retrievers.

This module provides functionality to create and manage retrievers for different
vector store backends, specifically Elasticsearch, Pinecone, and MongoDB.

Every retriever is scoped to a single user: the user_id from the configuration
is written into the backend's filter after any caller-supplied search options,
so it cannot be overridden. A new retriever is built on every call.
"""

import copy
import logging
from contextlib import contextmanager
from typing import Any, Callable, ContextManager, Generator, Optional

from langchain_core.embeddings import Embeddings
from langchain_core.runnables import RunnableConfig
from langchain_core.vectorstores import VectorStoreRetriever

from shared.configuration import BaseConfiguration
from shared.embeddings import make_text_encoder
from shared.errors import (
    MissingCredentialError,
    MissingIndexError,
    MissingTenantError,
    RetrievalConfigurationError,
    UnsupportedProviderError,
)
from shared.settings import VectorStoreSettings, get_vector_store_settings

logger = logging.getLogger(__name__)

MONGODB_DATABASE = "langgraph_retrieval_agent"

## Retriever constructors


def _require(value: Optional[str], variable: str) -> str:
    if not value:
        raise MissingCredentialError(variable)
    return value


def _clause_list(value: Any, key: str) -> list[Any]:
    """Normalize an Elasticsearch filter: a single clause or a list of clauses."""
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    raise RetrievalConfigurationError(
        f"search_kwargs[{key!r}] must be a clause dict or a list of clauses, got {type(value).__name__}"
    )


def _filter_dict(value: Any, key: str) -> dict[str, Any]:
    """Normalize a Pinecone or MongoDB filter, which must be a mapping."""
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RetrievalConfigurationError(
        f"search_kwargs[{key!r}] must be a dict, got {type(value).__name__}"
    )


@contextmanager
def make_elastic_retriever(
    configuration: BaseConfiguration,
    embedding_model: Embeddings,
    settings: VectorStoreSettings,
) -> Generator[VectorStoreRetriever, None, None]:
    """Configure this agent to connect to a specific elastic index."""
    from langchain_elasticsearch import ElasticsearchStore

    es_url = _require(settings.elasticsearch_url, "ELASTICSEARCH_URL")
    if configuration.retriever_provider == "elastic-local":
        connection_options = {
            "es_user": _require(settings.elasticsearch_user, "ELASTICSEARCH_USER"),
            "es_password": _require(
                settings.elasticsearch_password, "ELASTICSEARCH_PASSWORD"
            ),
        }
    else:
        connection_options = {
            "es_api_key": _require(
                settings.elasticsearch_api_key, "ELASTICSEARCH_API_KEY"
            )
        }

    search_kwargs = copy.deepcopy(configuration.search_kwargs)
    search_filter = _clause_list(search_kwargs.get("filter"), "filter")
    search_filter.append({"term": {"metadata.user_id": configuration.user_id}})
    search_kwargs["filter"] = search_filter

    vstore = ElasticsearchStore(
        **connection_options,  # type: ignore
        es_url=es_url,
        index_name=settings.elasticsearch_index_name,
        embedding=embedding_model,
    )
    yield vstore.as_retriever(search_kwargs=search_kwargs)


@contextmanager
def make_pinecone_retriever(
    configuration: BaseConfiguration,
    embedding_model: Embeddings,
    settings: VectorStoreSettings,
) -> Generator[VectorStoreRetriever, None, None]:
    """Configure this agent to connect to a specific pinecone index."""
    from langchain_pinecone import PineconeVectorStore

    if not settings.pinecone_index_name:
        raise MissingIndexError("PINECONE_INDEX_NAME")

    search_kwargs = copy.deepcopy(configuration.search_kwargs)
    search_filter = _filter_dict(search_kwargs.get("filter"), "filter")
    search_filter["user_id"] = configuration.user_id
    search_kwargs["filter"] = search_filter

    vstore = PineconeVectorStore(
        index_name=settings.pinecone_index_name,
        embedding=embedding_model,
        pinecone_api_key=settings.pinecone_api_key,
    )
    yield vstore.as_retriever(search_kwargs=search_kwargs)


@contextmanager
def make_mongodb_retriever(
    configuration: BaseConfiguration,
    embedding_model: Embeddings,
    settings: VectorStoreSettings,
) -> Generator[VectorStoreRetriever, None, None]:
    """Configure this agent to connect to a specific MongoDB Atlas index & namespaces."""
    from langchain_mongodb.vectorstores import MongoDBAtlasVectorSearch
    from pymongo import MongoClient

    uri = _require(settings.mongodb_uri, "MONGODB_URI")
    search_kwargs = copy.deepcopy(configuration.search_kwargs)
    pre_filter = _filter_dict(search_kwargs.get("pre_filter"), "pre_filter")
    pre_filter["user_id"] = {"$eq": configuration.user_id}
    search_kwargs["pre_filter"] = pre_filter

    # Each user gets a collection of their own inside the shared database. The
    # collection is looked up directly because user ids may contain dots.
    collection = MongoClient(uri)[MONGODB_DATABASE][configuration.user_id]
    vstore = MongoDBAtlasVectorSearch(
        collection=collection,
        embedding=embedding_model,
        index_name=settings.mongodb_index_name,
    )
    yield vstore.as_retriever(search_kwargs=search_kwargs)


RetrieverBuilder = Callable[
    [BaseConfiguration, Embeddings, VectorStoreSettings],
    ContextManager[VectorStoreRetriever],
]

RETRIEVER_BUILDERS: dict[str, RetrieverBuilder] = {
    "elastic": make_elastic_retriever,
    "elastic-local": make_elastic_retriever,
    "pinecone": make_pinecone_retriever,
    "mongodb": make_mongodb_retriever,
}


@contextmanager
def make_retriever(
    config: RunnableConfig,
    *,
    embedding_model: Optional[Embeddings] = None,
    settings: Optional[VectorStoreSettings] = None,
) -> Generator[VectorStoreRetriever, None, None]:
    """Create a retriever for the agent, based on the current configuration.

    Args:
        config (RunnableConfig): The runnable config holding the ``configurable`` options.
        embedding_model (Optional[Embeddings]): Embedder to use instead of the one
            named by ``embedding_model`` in the configuration.
        settings (Optional[VectorStoreSettings]): Connection settings. Defaults to the
            ones read from the environment.

    Raises:
        MissingTenantError: If no user_id is configured.
        UnsupportedProviderError: If retriever_provider is not a known backend.
        MissingCredentialError: If the chosen backend lacks a connection credential.
        MissingIndexError: If the chosen backend lacks an index name.
    """
    configuration = BaseConfiguration.from_runnable_config(config)
    if not configuration.user_id:
        raise MissingTenantError()

    builder = RETRIEVER_BUILDERS.get(configuration.retriever_provider)
    if builder is None:
        raise UnsupportedProviderError("retriever", configuration.retriever_provider)

    if settings is None:
        settings = get_vector_store_settings()
    if embedding_model is None:
        embedding_model = make_text_encoder(configuration.embedding_model)

    logger.debug(
        "Building %s retriever for user %s",
        configuration.retriever_provider,
        configuration.user_id,
    )
    with builder(configuration, embedding_model, settings) as retriever:
        yield retriever
