"""Bearer token verification for the external identity service."""

from .token_verifier import JWTTokenVerifier

__all__ = ["JWTTokenVerifier"]
