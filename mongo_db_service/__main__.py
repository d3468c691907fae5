"""
Launch script for the mongo-db-service server.

Runs the ASGI application with uvicorn using the host, port and log level
from the application settings.
"""

import uvicorn

from mongo_db_service.server.core.config import settings


def main() -> None:
    uvicorn.run(
        "mongo_db_service.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
