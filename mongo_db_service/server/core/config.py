"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class MongoDBConfig(BaseModel):
    """MongoDB connection configuration."""

    uri: str = Field(
        default="mongodb://localhost:27017", alias="MONGODB_URI", description="MongoDB connection string"
    )
    database: str = Field(default="mongo_db_service", alias="MONGODB_DATABASE", description="MongoDB database name")
    server_selection_timeout_ms: int = Field(
        default=5000,
        alias="MONGODB_SERVER_SELECTION_TIMEOUT_MS",
        description="How long the driver waits for a reachable server before failing",
    )

    model_config = {"populate_by_name": True}


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    # =====================================================================
    # Pydantic Configuration
    # =====================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="Server host address to bind to",
        alias="MONGO_DB_SERVICE_SERVER_HOST",
    )
    server_port: int = Field(
        default=8080,
        description="Server port number",
        alias="MONGO_DB_SERVICE_SERVER_PORT",
    )
    profile: str = Field(
        default="default",
        description="Active runtime profile (default, test, prod)",
        alias="MONGO_DB_SERVICE_PROFILE",
    )

    # =====================================================================
    # Logging Configuration
    # =====================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="MONGO_DB_SERVICE_LOG_LEVEL",
    )
    log_format: str = Field(
        default="detailed",
        description="Log line format (simple, detailed, json)",
        alias="MONGO_DB_SERVICE_LOG_FORMAT",
    )
    enable_file_logging: bool = Field(
        default=False,
        description="Also write logs to a file under log_file_dir",
        alias="MONGO_DB_SERVICE_ENABLE_FILE_LOGGING",
    )
    log_file_dir: str = Field(
        default="logs",
        description="Directory for the log file",
        alias="MONGO_DB_SERVICE_LOG_FILE_DIR",
    )

    # =====================================================================
    # MongoDB Configuration
    # =====================================================================
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string",
        alias="MONGODB_URI",
    )
    mongodb_database: str = Field(
        default="mongo_db_service",
        description="MongoDB database holding the users collection",
        alias="MONGODB_DATABASE",
    )
    mongodb_server_selection_timeout_ms: int = Field(
        default=5000,
        description="Driver server selection timeout in milliseconds",
        alias="MONGODB_SERVER_SELECTION_TIMEOUT_MS",
    )

    # =====================================================================
    # CORS Configuration
    # =====================================================================
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(default=["*"], alias="CORS_ALLOW_METHODS")
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def mongodb(self) -> MongoDBConfig:
        """Get MongoDB configuration from environment variables."""
        return MongoDBConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def is_test_profile(self) -> bool:
        return self.profile.lower() == "test"


settings = Settings()
