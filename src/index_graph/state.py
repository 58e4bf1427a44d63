"""State management for the index graph.

This module defines the state structures used in the index graph.

Classes:
    IndexState: Represents the state for document indexing operations.
"""

from dataclasses import dataclass, field
from typing import Annotated, Sequence

from langchain_core.documents import Document

from shared.state import reduce_docs

############################  Doc Indexing State  #############################


# The index state defines the simple IO for the single-node index graph
@dataclass(kw_only=True)
class IndexState:
    """Represents the state for document indexing.

    ``docs`` is a transient buffer: documents are written into it, indexed,
    and then cleared with a "delete" update.
    """

    docs: Annotated[Sequence[Document], reduce_docs] = field(default_factory=list)
    """A list of documents that the agent can index."""
