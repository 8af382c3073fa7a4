"""Configuration management for minipdf."""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass
class Config:
    """minipdf configuration.

    Attributes:
        pdf_version: Version written in the file header ("1.7")
        page_width: Default page width in points (US Letter)
        page_height: Default page height in points (US Letter)
        producer: Producer entry written into the document Info dictionary
        string_encoding: Encoding applied to ``str`` values turned into PDF strings
        log_level: Logging level name used by ``setup_logging``
    """

    pdf_version: str = "1.7"
    page_width: float = 612
    page_height: float = 792
    producer: str = "minipdf"
    string_encoding: str = "utf-8"
    log_level: str = "WARNING"

    @property
    def log_level_value(self) -> int:
        """Numeric logging level for ``log_level``."""
        return getattr(logging, self.log_level.upper(), logging.WARNING)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Config":
        """Load configuration from environment variables.

        Args:
            env_file: Path to .env file (optional)

        Returns:
            Config instance with values from environment
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        return cls(
            pdf_version=os.getenv("MINIPDF_PDF_VERSION", "1.7"),
            page_width=float(os.getenv("MINIPDF_PAGE_WIDTH", "612")),
            page_height=float(os.getenv("MINIPDF_PAGE_HEIGHT", "792")),
            producer=os.getenv("MINIPDF_PRODUCER", "minipdf"),
            string_encoding=os.getenv("MINIPDF_STRING_ENCODING", "utf-8"),
            log_level=os.getenv("MINIPDF_LOG_LEVEL", "WARNING"),
        )

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Load configuration from dictionary.

        Args:
            config_dict: Dictionary with configuration values

        Returns:
            Config instance
        """
        return cls(**{k: v for k, v in config_dict.items() if k in cls.__annotations__})
