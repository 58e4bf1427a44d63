"""Errors raised while resolving retrievers and embedders.

All of these signal misconfiguration rather than a transient failure, so they
are raised where the problem is first detected and are never retried.
"""

from __future__ import annotations


class RetrievalConfigurationError(ValueError):
    """Base class for retriever and embedder configuration errors."""


class MissingTenantError(RetrievalConfigurationError):
    """Raised when a retriever is requested without a user_id."""

    def __init__(self) -> None:
        super().__init__("Please provide a valid user_id in the configuration.")


class MissingCredentialError(RetrievalConfigurationError):
    """Raised when a required connection credential is not set."""

    def __init__(self, variable: str) -> None:
        self.variable = variable
        super().__init__(f"Missing required environment variable: {variable}")


class MissingIndexError(RetrievalConfigurationError):
    """Raised when the index or collection to search is not set."""

    def __init__(self, variable: str) -> None:
        self.variable = variable
        super().__init__(f"{variable} environment variable is not defined")


class UnsupportedProviderError(RetrievalConfigurationError):
    """Raised for an unrecognized retriever or embedding provider."""

    def __init__(self, kind: str, value: str) -> None:
        self.kind = kind
        self.value = value
        super().__init__(f"Unrecognized {kind} provider in configuration: {value!r}")
