import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load the appropriate .env file on module import
env = os.environ.get("DATABUILDER_ENV", "development").lower()
env_file = f".env.{env}"
if os.path.exists(env_file):
    load_dotenv(env_file)
else:
    # Fall back to the default .env file
    load_dotenv()


@dataclass
class Config:
    environment: str
    database_url: str | None
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            environment=env,
            database_url=os.environ.get("DATABASE_URL"),
            log_level=os.environ.get("DATABUILDER_LOG_LEVEL", "WARNING").upper(),
        )


config = Config.from_env()


def configure_logging(level: str | None = None) -> None:
    """Send databuilder's debug output somewhere; the library never does this itself."""
    logging.basicConfig(level=level or config.log_level)
