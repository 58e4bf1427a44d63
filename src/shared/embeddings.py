"""Resolve an embedding model name to a LangChain embeddings backend."""

from __future__ import annotations

from langchain_core.embeddings import Embeddings

from shared.errors import UnsupportedProviderError

DEFAULT_EMBEDDING_PROVIDER = "openai"


def parse_model_name(fully_specified_name: str) -> tuple[str, str]:
    """Split 'provider/model' on the first slash.

    A bare model name is assumed to belong to the default provider.
    """
    if "/" in fully_specified_name:
        provider, model = fully_specified_name.split("/", maxsplit=1)
    else:
        provider, model = DEFAULT_EMBEDDING_PROVIDER, fully_specified_name
    return provider, model


def make_text_encoder(model: str) -> Embeddings:
    """Connect to the configured text encoder."""
    provider, model = parse_model_name(model)
    match provider:
        case "openai":
            from langchain_openai import OpenAIEmbeddings

            return OpenAIEmbeddings(model=model)
        case "cohere":
            from langchain_cohere import CohereEmbeddings

            return CohereEmbeddings(model=model)  # type: ignore
        case _:
            raise UnsupportedProviderError("embedding", provider)
