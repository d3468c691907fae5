"""Service layer for the mongo-db-service server."""
