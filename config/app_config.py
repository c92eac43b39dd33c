"""
Centralized application configuration management.
Provides type-safe configuration with environment variable support.
"""

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv

DEFAULT_API_BASE_URL = "https://shopnro.hitly.click/api/v1"

@dataclass
class ApiConfig:
    """External REST API settings."""
    base_url: str = DEFAULT_API_BASE_URL
    timeout: Optional[float] = None
    default_page_size: int = 10

@dataclass
class SessionConfig:
    """Where the admin session (tokens + user) is persisted."""
    path: str = str(Path.home() / ".shop_admin" / "session.json")

@dataclass
class MockStorageConfig:
    """JSON fixture backing the mock server."""
    path: str = str(Path(__file__).resolve().parent.parent / "data" / "mock_data.json")

@dataclass
class SecurityConfig:
    """Security configuration settings."""
    jwt_secret: Optional[str] = None
    token_expiry_hours: int = 24
    bcrypt_rounds: int = 12

@dataclass
class ServerConfig:
    """Mock server configuration settings."""
    host: str = "0.0.0.0"
    port: int = 5000
    threads: int = 4

@dataclass
class MonitoringConfig:
    """Logging configuration settings."""
    log_level: str = "INFO"

@dataclass
class AppConfig:
    """Main application configuration."""
    api: ApiConfig = field(default_factory=ApiConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    mock_storage: MockStorageConfig = field(default_factory=MockStorageConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> 'AppConfig':
        """Load configuration from environment variables."""
        if env_file and os.path.exists(env_file):
            load_dotenv(env_file)

        timeout = os.getenv("API_TIMEOUT")
        defaults = cls()

        return cls(
            api=ApiConfig(
                base_url=os.getenv("API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
                timeout=float(timeout) if timeout else None,
                default_page_size=int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
            ),
            session=SessionConfig(
                path=os.getenv("SESSION_FILE", defaults.session.path)
            ),
            mock_storage=MockStorageConfig(
                path=os.getenv("MOCK_DATA_PATH", defaults.mock_storage.path)
            ),
            security=SecurityConfig(
                jwt_secret=os.getenv("JWT_SECRET"),
                token_expiry_hours=int(os.getenv("TOKEN_EXPIRY_HOURS", "24")),
                bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "12"))
            ),
            server=ServerConfig(
                host=os.getenv("SERVER_HOST", "0.0.0.0"),
                port=int(os.getenv("API_PORT", "5000")),
                threads=int(os.getenv("SERVER_THREADS", "4"))
            ),
            monitoring=MonitoringConfig(
                log_level=os.getenv("LOG_LEVEL", "INFO")
            )
        )

    def validate(self) -> None:
        """Validate configuration settings."""
        if not self.api.base_url.startswith(("http://", "https://")):
            raise ValueError("API_BASE_URL must be an http(s) URL")
        if self.api.default_page_size < 1:
            raise ValueError("DEFAULT_PAGE_SIZE must be positive")

        # Ensure session directory exists
        Path(self.session.path).parent.mkdir(parents=True, exist_ok=True)

# Global configuration instance
_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AppConfig.from_env(".env")
        _config.validate()
    return _config

def set_config(config: AppConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
