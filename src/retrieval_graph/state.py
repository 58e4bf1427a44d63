"""State management for the retrieval graph.

This module defines the state structures and reduction functions used in the
retrieval graph.

Classes:
    InputState: The narrow input interface of the graph (just the conversation).
    State: The full state carried between nodes.

Functions:
    add_queries: Append-only reducer for the search queries.
"""

from dataclasses import dataclass, field
from typing import Annotated, Sequence, Union

from langchain_core.documents import Document
from langchain_core.messages import AnyMessage
from langgraph.graph import add_messages


def add_queries(existing: Sequence[str], new: Union[Sequence[str], str]) -> list[str]:
    """Combine existing queries with new queries.

    The reducer is append only. A single string is treated as one query.

    Args:
        existing (Sequence[str]): The current list of queries in the state.
        new (Union[Sequence[str], str]): The new queries to be added.

    Returns:
        list[str]: A new list containing all queries, oldest first.
    """
    if isinstance(new, str):
        new = [new]
    return list(existing or []) + list(new)


# Optional, the InputState is a restricted version of the State that is used to
# define a narrower interface to the outside world vs. what is maintained
# internally.
@dataclass(kw_only=True)
class InputState:
    """Represents the input state for the agent.

    This class defines the structure of the input state, which includes
    the messages exchanged between the user and the agent.
    """

    messages: Annotated[Sequence[AnyMessage], add_messages] = field(
        default_factory=list
    )
    """Messages track the primary execution state of the agent.

    New messages are appended in arrival order. To remove one, return a
    ``langchain_core.messages.RemoveMessage`` with its id.
    """


@dataclass(kw_only=True)
class State(InputState):
    """The state of your graph / agent."""

    queries: Annotated[list[str], add_queries] = field(default_factory=list)
    """A list of search queries that the agent has generated. The last one is searched."""

    retrieved_docs: list[Document] = field(default_factory=list)
    """Populated by the retriever. Replaced, not merged, on every retrieval."""
