"""In-memory meeting scheduler with availability tracking, slot suggestions and a JSON HTTP API."""

__version__ = "0.1.0"
__all__ = ["models", "repository", "service", "handler", "server"]