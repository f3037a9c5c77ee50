class SentimentDashboardError(Exception):
    """Base exception for application-level errors."""


class ValidationError(SentimentDashboardError):
    """Raised when request parameters fail domain-level validation."""


class DataSourceError(SentimentDashboardError):
    """Raised when the sentiment data source fails or returns malformed rows."""


class ConfigStoreError(SentimentDashboardError):
    """Raised when a stored configuration blob cannot be read or parsed."""
