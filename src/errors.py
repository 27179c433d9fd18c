"""
Error taxonomy for review generation.

ConfigurationError and InvalidRequestError are raised before any review is
generated. PersistenceError is raised per item by the review store.
"""


class ReviewGenerationError(Exception):
    """Base class for all review generation errors."""


class ConfigurationError(ReviewGenerationError, ValueError):
    """Invalid rating distribution, empty country list or malformed settings."""


class InvalidRequestError(ReviewGenerationError, ValueError):
    """Batch size outside the allowed range or unknown product."""


class PersistenceError(ReviewGenerationError):
    """A review could not be written to the review store."""

    def __init__(self, message: str, product_id: int = None):
        super().__init__(message)
        self.product_id = product_id
