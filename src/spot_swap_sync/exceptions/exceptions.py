"""Custom exceptions for chain data access and swap sync."""

from __future__ import annotations


class SpotSyncError(Exception):
    """Base exception for spot swap sync errors."""

    pass


class MissingRequiredConfigError(SpotSyncError):
    """Raised when a required configuration value is missing."""

    pass


class ChainDataSourceError(SpotSyncError):
    """Raised when a chain data request fails after retries or returns an RPC error."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class RateLimitError(ChainDataSourceError):
    """Raised when the RPC endpoint returns HTTP 429 (Too Many Requests)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded (429)",
        *,
        url: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, url=url, status_code=429)
        self.retry_after = retry_after


class UnsupportedChainOperationError(SpotSyncError):
    """Raised when an operation is requested for a chain that cannot serve it (e.g. non-EVM)."""

    def __init__(self, operation: str, chain: str, reason: str | None = None) -> None:
        detail = reason or "the chain is not an EVM chain"
        super().__init__(f"{operation} is not supported for chain '{chain}': {detail}")
        self.operation = operation
        self.chain = chain
