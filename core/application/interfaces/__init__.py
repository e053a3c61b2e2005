"""Application layer interfaces."""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from core.domain.value_objects import Identity


class IWebhookVerifier(ABC):
    """
    Interface for payment webhook authenticity checks.
    
    Implementations verify the provider's signature over the raw,
    unparsed request body.
    """
    
    @abstractmethod
    def construct_event(self, payload: bytes, header: Optional[str]) -> Dict[str, Any]:
        """
        Verify a webhook delivery and decode its body.

        Args:
            payload: Raw request body
            header: Signature header value

        Returns:
            Decoded event envelope

        Raises:
            WebhookAuthError: If the delivery is not authentic
            ValidationError: If the body is not JSON
        """
        pass


class ITokenVerifier(ABC):
    """
    Interface for the external identity check.
    
    Turns a bearer token into the caller's Identity.
    """
    
    @abstractmethod
    def verify(self, token: Optional[str]) -> Identity:
        """
        Verify a bearer token.
        
        Args:
            token: Raw token (None when the header is absent)
        
        Returns:
            Identity of the caller
        
        Raises:
            AuthError: If the token is missing or invalid
        """
        pass


__all__ = ["IWebhookVerifier", "ITokenVerifier"]
