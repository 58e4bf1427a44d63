"""Shared functions for state management."""

import uuid
from typing import Any, Callable, Literal, Optional, Union

from langchain_core.documents import Document


def _generate_uuid() -> str:
    """Generate a random document id."""
    return str(uuid.uuid4())


def _coerce_doc(item: Union[Document, dict[str, Any]], id_factory: Callable[[], str]) -> Document:
    """Build a new Document from a Document or dict, keeping any caller-supplied id."""
    if isinstance(item, Document):
        page_content = item.page_content
        metadata = dict(item.metadata or {})
        doc_id = item.id
    else:
        page_content = item.get("page_content", "")
        metadata = dict(item.get("metadata") or {})
        doc_id = item.get("id")

    doc_id = doc_id or metadata.get("id") or id_factory()
    metadata["id"] = doc_id
    return Document(page_content=page_content, metadata=metadata, id=doc_id)


def reduce_docs(
    existing: Optional[list[Document]],
    new: Union[
        list[Document],
        list[dict[str, Any]],
        list[str],
        str,
        Literal["delete"],
    ],
    *,
    id_factory: Callable[[], str] = _generate_uuid,
) -> list[Document]:
    """Reduce and process documents based on the input type.

    This function handles various input types and converts them into a sequence of Document objects.
    It can delete existing documents, create new ones from strings or dictionaries, or return the existing documents.

    Args:
        existing (Optional[list[Document]]): The existing docs in the state, if any.
        new (Union[list[Document], list[dict[str, Any]], list[str], str, Literal["delete"]]):
            The new input to process. Can be a list of Documents, dictionaries, strings, a single string,
            or the literal "delete".
        id_factory (Callable[[], str]): Produces ids for documents that arrive without one.

    Returns:
        list[Document]: A new list. Neither ``existing`` nor the items of ``new`` are modified.
    """
    if new == "delete":
        return []
    if isinstance(new, str):
        doc_id = id_factory()
        return [Document(page_content=new, metadata={"id": doc_id}, id=doc_id)]
    if isinstance(new, (list, tuple)):
        coerced = []
        for item in new:
            if isinstance(item, str):
                doc_id = id_factory()
                coerced.append(Document(page_content=item, metadata={"id": doc_id}, id=doc_id))
            elif isinstance(item, (Document, dict)):
                coerced.append(_coerce_doc(item, id_factory))
        return coerced
    return list(existing or [])
