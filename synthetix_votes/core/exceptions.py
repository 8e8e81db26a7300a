"""
Strategy exceptions.

Provider and transport failures are raised with one of these types so a host
can tell an RPC outage from a subgraph outage. Empty or malformed subgraph
bodies only raise in strict mode.
"""

from typing import Any, Dict, Optional


class StrategyError(Exception):
    """Base exception for all strategy errors."""

    def __init__(
        self,
        message: str,
        chain: Optional[str] = None,
        original_error: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.chain = chain
        self.original_error = original_error
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "chain": self.chain,
            "original_error": str(self.original_error) if self.original_error else None,
            "context": self.context,
        }

    def __str__(self) -> str:
        parts = [f"{self.__class__.__name__}: {self.message}"]
        if self.chain:
            parts.append(f"[chain={self.chain}]")
        if self.original_error:
            parts.append(f"(caused by: {self.original_error})")
        return " ".join(parts)


class ProviderError(StrategyError):
    """A read-only contract call failed."""

    def __init__(
        self,
        message: str,
        contract_address: Optional[str] = None,
        function_name: Optional[str] = None,
        block: Any = None,
        chain: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(
            message,
            chain=chain,
            original_error=original_error,
            context={
                "contract_address": contract_address,
                "function_name": function_name,
                "block": block,
            },
        )
        self.contract_address = contract_address
        self.function_name = function_name
        self.block = block


class QueryError(StrategyError):
    """The subgraph could not be reached or answered with an HTTP error."""

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
        chain: Optional[str] = None,
        original_error: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, chain=chain, original_error=original_error, context=context)
        self.endpoint = endpoint
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "endpoint": self.endpoint,
            "status_code": self.status_code,
        })
        return data


class MalformedResponseError(QueryError):
    """The subgraph answered but the body held no usable holder list."""


class ConfigError(StrategyError):
    """Strategy configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None) -> None:
        super().__init__(message, context={"errors": errors or []})
        self.errors = errors or []
