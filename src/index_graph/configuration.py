"""Define the configurable parameters for the index graph."""

from __future__ import annotations

from dataclasses import dataclass

from shared.configuration import BaseConfiguration


@dataclass(kw_only=True, frozen=True)
class IndexConfiguration(BaseConfiguration):
    """Configuration class for indexing operations.

    Indexing needs only the shared fields: the user the documents belong to,
    the embedding model, and the vector store to write to.
    """
