"""Retrieval Graph Module.

This module defines a conversational retrieval graph: it turns the
conversation into a search query, retrieves the user's documents from the
configured vector store, and answers based on them. The compiled graph is
``retrieval_graph.graph.graph``.
"""
