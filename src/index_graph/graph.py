"""This "graph" simply exposes an endpoint for a user to upload docs to be indexed."""

import logging
from typing import Optional, Sequence

from langchain_core.documents import Document
from langchain_core.runnables import RunnableConfig
from langgraph.graph import END, START, StateGraph

from index_graph.configuration import IndexConfiguration
from index_graph.state import IndexState
from shared import retrieval

logger = logging.getLogger(__name__)


def ensure_docs_have_user_id(
    docs: Sequence[Document], config: RunnableConfig
) -> list[Document]:
    """Return copies of the documents with metadata.user_id set to the configured user.

    Any user_id already present in the metadata is overwritten.

    Args:
        docs (Sequence[Document]): A sequence of Document objects to process.
        config (RunnableConfig): A configuration object containing the user_id.

    Returns:
        list[Document]: A new list of Document objects with updated metadata.
    """
    user_id = IndexConfiguration.from_runnable_config(config).user_id
    return [
        Document(
            page_content=doc.page_content,
            metadata={**doc.metadata, "user_id": user_id},
            id=doc.id,
        )
        for doc in docs
    ]


async def index_docs(
    state: IndexState, *, config: Optional[RunnableConfig] = None
) -> dict[str, str]:
    """Asynchronously index documents in the given state using the configured retriever.

    This function takes the documents from the state, ensures they have a user ID,
    adds them to the retriever's index, and then signals for the documents to be
    deleted from the state.

    The "delete" update is only returned once the write has succeeded. If adding
    the documents raises (or the run is cancelled), the error propagates and
    ``docs`` keeps its contents so the caller can retry.

    Args:
        state (IndexState): The current state containing documents and retriever.
        config (Optional[RunnableConfig]): Configuration for the indexing process.
    """
    if not config:
        raise ValueError("Configuration required to run index_docs.")

    with retrieval.make_retriever(config) as retriever:
        stamped_docs = ensure_docs_have_user_id(state.docs, config)
        if stamped_docs:
            await retriever.aadd_documents(stamped_docs)
    logger.info("Indexed %d documents", len(stamped_docs))
    return {"docs": "delete"}


# Define a new graph

builder = StateGraph(IndexState, config_schema=IndexConfiguration)
builder.add_node(index_docs)
builder.add_edge(START, "index_docs")
builder.add_edge("index_docs", END)
# Finally, we compile it!
# This compiles it into a graph you can invoke and deploy.
graph = builder.compile()
graph.name = "IndexGraph"
