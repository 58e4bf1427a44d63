"""Main entrypoint for the conversational retrieval graph.

This module defines the core structure and functionality of the conversational
retrieval graph. It includes the main graph definition and the functions for
generating queries, retrieving relevant documents, and formulating responses.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, TypedDict

from langchain_core.documents import Document
from langchain_core.messages import BaseMessage
from langchain_core.runnables import RunnableConfig
from langgraph.graph import END, START, StateGraph

from retrieval_graph.configuration import Configuration
from retrieval_graph.state import InputState, State
from shared import retrieval
from shared.utils import format_docs, get_message_text, load_chat_model

logger = logging.getLogger(__name__)


class SearchQuery(TypedDict):
    """Search the indexed documents for a query."""

    query: str


def _system_time() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


async def generate_query(
    state: State, *, config: Optional[RunnableConfig] = None
) -> dict[str, list[str]]:
    """Generate a search query based on the current state and configuration.

    The first user message is used as-is, without calling a model. For later
    turns the query model rewrites the conversation into a single search query.

    Args:
        state (State): The current state containing messages and other information.
        config (Optional[RunnableConfig]): Configuration for the query generation process.

    Returns:
        dict[str, list[str]]: A dictionary with a 'queries' key containing a list with the generated query.
    """
    messages = state.messages
    if len(messages) == 1:
        # It's the first user question. We will use the input directly to search.
        human_input = get_message_text(messages[-1])
        return {"queries": [human_input]}

    configuration = Configuration.from_runnable_config(config)
    system_prompt = configuration.query_system_prompt.format(
        queries="\n- ".join(state.queries),
        system_time=_system_time(),
    )
    model = load_chat_model(configuration.query_model).with_structured_output(
        SearchQuery
    )
    generated = await model.ainvoke(
        [{"role": "system", "content": system_prompt}, *messages], config
    )
    logger.debug("Generated search query: %s", generated["query"])
    return {"queries": [generated["query"]]}


async def retrieve(
    state: State, *, config: RunnableConfig
) -> dict[str, list[Document]]:
    """Retrieve documents based on the latest query in the state.

    Args:
        state (State): The current state containing queries and the retriever.
        config (RunnableConfig): Configuration for the retrieval process.

    Returns:
        dict[str, list[Document]]: A dictionary with a 'retrieved_docs' key containing a list of retrieved Document objects.
    """
    if not state.queries:
        raise ValueError("No search query available to retrieve documents.")
    query = state.queries[-1]
    with retrieval.make_retriever(config) as retriever:
        response = await retriever.ainvoke(query, config)
    return {"retrieved_docs": response}


async def respond(
    state: State, *, config: RunnableConfig
) -> dict[str, list[BaseMessage]]:
    """Call the LLM powering our "agent"."""
    configuration = Configuration.from_runnable_config(config)
    system_prompt = configuration.response_system_prompt.format(
        retrieved_docs=format_docs(state.retrieved_docs),
        system_time=_system_time(),
    )
    model = load_chat_model(configuration.response_model)
    response = await model.ainvoke(
        [{"role": "system", "content": system_prompt}, *state.messages], config
    )
    # We return a list, because this will get added to the existing list
    return {"messages": [response]}


# Define a new graph (It's just a pipe)

builder = StateGraph(State, input_schema=InputState, config_schema=Configuration)

builder.add_node(generate_query)
builder.add_node(retrieve)
builder.add_node(respond)
builder.add_edge(START, "generate_query")
builder.add_edge("generate_query", "retrieve")
builder.add_edge("retrieve", "respond")
builder.add_edge("respond", END)

# Finally, we compile it!
# This compiles it into a graph you can invoke and deploy.
graph = builder.compile(
    interrupt_before=[],  # if you want to update the state before calling the tools
    interrupt_after=[],
)
graph.name = "RetrievalGraph"
