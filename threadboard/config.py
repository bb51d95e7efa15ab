"""
ThreadBoard Configuration Module

Handles loading, validation, and management of configuration settings.
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# Use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


DEFAULT_SECRET_KEY = "changeme"


@dataclass
class BoardConfig:
    """Board general settings."""
    name: str = "ThreadBoard"
    secret_key: str = DEFAULT_SECRET_KEY
    display_timezone: str = "America/New_York"
    motd: str = "Welcome to ThreadBoard!"


@dataclass
class DatabaseConfig:
    """Database settings."""
    path: str = "threadboard.db"


@dataclass
class CryptoConfig:
    """Password hashing settings."""
    argon2_time_cost: int = 3
    argon2_memory_kb: int = 65536  # 64MB
    argon2_parallelism: int = 1


@dataclass
class WebConfig:
    """Web server settings."""
    host: str = "127.0.0.1"
    port: int = 3000
    session_cookie_secure: bool = False
    login_attempts_per_minute: int = 5
    registration_enabled: bool = True


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    file: str = ""


@dataclass
class Config:
    """Main configuration container."""
    board: BoardConfig = field(default_factory=BoardConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    crypto: CryptoConfig = field(default_factory=CryptoConfig)
    web: WebConfig = field(default_factory=WebConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.board.name:
            errors.append("board.name cannot be empty")
        if self.board.secret_key == DEFAULT_SECRET_KEY or not self.board.secret_key:
            errors.append("board.secret_key must be changed from default")

        try:
            ZoneInfo(self.board.display_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(f"board.display_timezone '{self.board.display_timezone}' is not a known timezone")

        if not self.database.path:
            errors.append("database.path cannot be empty")

        if not 0 < self.web.port < 65536:
            errors.append("web.port must be between 1 and 65535")
        if self.web.login_attempts_per_minute < 0:
            errors.append("web.login_attempts_per_minute cannot be negative")

        if self.crypto.argon2_memory_kb > 1048576:
            errors.append("crypto.argon2_memory_kb should not exceed 1048576 (1GB)")
        if self.crypto.argon2_time_cost < 1:
            errors.append("crypto.argon2_time_cost must be at least 1")

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if self.logging.level.upper() not in valid_levels:
            errors.append(f"logging.level must be one of: {valid_levels}")

        return errors

    def save(self, path: Path):
        """Save configuration to TOML file."""
        import toml  # For writing

        data = self._to_dict()

        with open(path, "w") as f:
            toml.dump(data, f)

    def _to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization."""
        from dataclasses import asdict
        return asdict(self)


def load_config(path: Path) -> Config:
    """Load configuration from TOML file."""
    config = Config()

    if not path.exists():
        return config

    with open(path, "rb") as f:
        data = tomllib.load(f)

    if "board" in data:
        config.board = BoardConfig(**data["board"])

    if "database" in data:
        config.database = DatabaseConfig(**data["database"])

    if "crypto" in data:
        config.crypto = CryptoConfig(**data["crypto"])

    if "web" in data:
        config.web = WebConfig(**data["web"])

    if "logging" in data:
        config.logging = LoggingConfig(**data["logging"])

    return config


def create_default_config(path: Path):
    """Create a default configuration file."""
    config = Config()
    config.save(path)
