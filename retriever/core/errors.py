"""
Retriever exceptions.

UnknownChain, TransportError and DecodeError are fatal for a job and stop a
batch. ProviderStatusError is the explorer saying "no" (unverified contract,
bad address) and is downgraded to an empty result by the dispatcher.
"""

from typing import Any, Dict, Optional


class RetrieverError(Exception):
    """Base exception for all retrieval errors."""
    
    def __init__(
        self,
        message: str,
        chain: Optional[str] = None,
        address: Optional[str] = None,
        provider: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.chain = chain
        self.address = address
        self.provider = provider
        self.original_error = original_error
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'chain': self.chain,
            'address': self.address,
            'provider': self.provider,
            'original_error': str(self.original_error) if self.original_error else None,
        }
    
    def __str__(self) -> str:
        parts = [self.message]
        if self.provider:
            parts.append(f"[provider={self.provider}]")
        if self.chain:
            parts.append(f"[chain={self.chain}]")
        if self.address:
            parts.append(f"[address={self.address}]")
        if self.original_error:
            parts.append(f"(caused by: {self.original_error})")
        return " ".join(parts)


class UnknownChain(RetrieverError):
    """Chain symbol or id is not in the registry."""


class TransportError(RetrieverError):
    """Network failure or non-2xx HTTP response."""
    
    def __init__(self, message: str, status_code: Optional[int] = None,
                 url: Optional[str] = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.status_code = status_code
        self.url = url
    
    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({'status_code': self.status_code, 'url': self.url})
        return data


class DecodeError(RetrieverError):
    """JSON could not be parsed at some unwrapping stage."""
    
    def __init__(self, message: str, stage: Optional[str] = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.stage = stage
    
    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['stage'] = self.stage
        return data


class ProviderStatusError(RetrieverError):
    """Explorer reported a failure status (e.g. contract not verified)."""
