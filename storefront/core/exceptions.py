from __future__ import annotations


class StorefrontError(Exception):
    """Base class for errors the services raise on purpose."""


class NotFoundError(StorefrontError):
    """Raised when a product, order or category does not exist."""


class ValidationError(StorefrontError):
    """Raised for malformed input: bad enum token, inverted price range..."""


class ExternalServiceError(StorefrontError):
    """Raised when the image host answers with anything but a success."""
