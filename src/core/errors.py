"""Domain exceptions for the candidate search engine."""


class SchemaError(ValueError):
    """Raised when an ingestion payload matches no known shape or is malformed."""
