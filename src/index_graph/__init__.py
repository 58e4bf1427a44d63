"""Index Graph Module.

Exposes a single-node graph (``index_graph.graph.graph``) that stamps documents
with the configured user_id and writes them into the configured vector store.
"""
