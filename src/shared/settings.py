"""Connection settings for the vector store backends.

These are process-level parameters (endpoints, credentials, index names). They
are read from the environment once and handed to the retriever builders
explicitly, so nothing below ``shared.retrieval`` touches the environment.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Environment-backed connection parameters for every supported vector store.

    Each field is read from the upper-cased environment variable of the same
    name (``ELASTICSEARCH_URL``, ``PINECONE_INDEX_NAME``, ...). Empty values
    count as unset.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Elasticsearch
    elasticsearch_url: Optional[str] = Field(default=None, description="Elasticsearch endpoint URL")
    elasticsearch_api_key: Optional[str] = Field(default=None, description="API key for hosted Elasticsearch")
    elasticsearch_user: Optional[str] = Field(default=None, description="Username for a local Elasticsearch")
    elasticsearch_password: Optional[str] = Field(default=None, description="Password for a local Elasticsearch")
    elasticsearch_index_name: str = "langchain_index"

    # Pinecone
    pinecone_index_name: Optional[str] = None
    pinecone_api_key: Optional[str] = None

    # MongoDB Atlas
    mongodb_uri: Optional[str] = Field(default=None, description="MongoDB Atlas connection string")
    mongodb_index_name: str = "vector_index"


@lru_cache
def get_vector_store_settings() -> VectorStoreSettings:
    """Return the process-wide settings, reading the environment on first use."""
    return VectorStoreSettings()
