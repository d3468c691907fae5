"""HTTP server for mongo-db-service (FastAPI application, routers and handlers)."""
