"""Service layer orchestrating the storefront components."""

from .storefront_session import StorefrontSession

__all__ = ["StorefrontSession"]
