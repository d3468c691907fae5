"""mongo-db-service: a FastAPI user-management service backed by MongoDB."""

__version__ = "0.0.1"
