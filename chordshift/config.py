import logging
from typing import Optional

from pydantic_settings import BaseSettings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    log_level: str = "INFO"
    verify_lattices: bool = True

    class Config:
        env_file = ".env"
        env_prefix = "CHORDSHIFT_"


settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Apply the package log format to the root logger.

    Uses ``settings.log_level`` unless an explicit level is given. The
    library itself never calls this on import.
    """
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
