from dotenv import load_dotenv
from dataclasses import dataclass
from typing import Optional
from pathlib import Path
import json
import os

from seo_grader.constants import DEFAULT_MAX_BODY_BYTES, DEFAULT_PORT

load_dotenv()  # Loads variables from .env file


class Settings:
    """
    Manages application settings loaded from environment variables.
    """
    LLM_API_KEY = os.getenv("LLM_API_KEY")
    LLM_MODEL = os.getenv("LLM_MODEL", "gpt-4o-mini")
    LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openai")

    # HTTP server
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", str(DEFAULT_PORT)))
    MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", str(DEFAULT_MAX_BODY_BYTES)))
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]
    STATIC_DIR = os.getenv("STATIC_DIR")  # Optional front-end directory

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()


@dataclass
class Config:
    """Configuration for the optimization suggestion provider."""
    llm_api_key: Optional[str] = None
    llm_model: str = "gpt-4o-mini"
    llm_provider: str = "openai"
    llm_max_tokens: int = 512
    llm_timeout: float = 30.0
    llm_max_retries: int = 2
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Returns:
            Config: Configuration instance with values from environment
        """
        return cls(
            llm_api_key=os.getenv("LLM_API_KEY"),
            llm_model=os.getenv("LLM_MODEL", "gpt-4o-mini"),
            llm_provider=os.getenv("LLM_PROVIDER", "openai"),
            llm_max_tokens=int(os.getenv("LLM_MAX_TOKENS", "512")),
            llm_timeout=float(os.getenv("LLM_TIMEOUT", "30")),
            llm_max_retries=int(os.getenv("LLM_MAX_RETRIES", "2")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


@dataclass
class GradingThresholds:
    """Configurable thresholds for the on-page checks."""

    # Title tag (characters, inclusive)
    title_min: int = 50
    title_max: int = 60

    # Meta description (characters, inclusive)
    meta_description_min: int = 150
    meta_description_max: int = 160

    # Content
    min_word_count: int = 500
    opening_words: int = 100  # Window for the "keyword appears early" check

    # Keyword density (percentage, inclusive)
    keyword_density_min: float = 1.0
    keyword_density_max: float = 3.0

    # Images
    alt_source_excerpt: int = 50  # Characters of src quoted for missing alt

    # Suggestions
    paragraph_snippet: int = 200  # Characters of first paragraph sent as context

    @classmethod
    def from_env(cls) -> "GradingThresholds":
        """Load thresholds from environment variables.

        Environment variables should be prefixed with SEO_THRESHOLD_
        e.g., SEO_THRESHOLD_MIN_WORD_COUNT=300

        Returns:
            GradingThresholds with values from environment
        """
        thresholds = cls()
        prefix = "SEO_THRESHOLD_"

        for field_name in thresholds.__dataclass_fields__:
            env_key = f"{prefix}{field_name.upper()}"
            env_value = os.getenv(env_key)

            if env_value is not None:
                try:
                    setattr(thresholds, field_name, thresholds._coerce(field_name, env_value))
                except ValueError:
                    pass  # Keep default if conversion fails

        return thresholds

    @classmethod
    def from_file(cls, path: str) -> "GradingThresholds":
        """Load thresholds from a JSON configuration file.

        Args:
            path: Path to JSON configuration file

        Returns:
            GradingThresholds with values from file

        Raises:
            ValueError: If the file is not valid JSON, is not an object, or
                holds a value that does not fit its threshold's type
        """
        thresholds = cls()
        file_path = Path(path)

        if not file_path.exists():
            return thresholds

        with open(file_path, 'r') as f:
            config = json.load(f)

        threshold_config = config.get('thresholds', config) if isinstance(config, dict) else None
        if not isinstance(threshold_config, dict):
            raise ValueError(f"Thresholds file {path} must contain a JSON object")

        for field_name in thresholds.__dataclass_fields__:
            if field_name in threshold_config:
                value = thresholds._coerce(field_name, threshold_config[field_name])
                setattr(thresholds, field_name, value)

        return thresholds

    def _coerce(self, field_name: str, value):
        """Convert a raw setting to its field's type.

        Numeric strings are accepted; booleans, fractional values for integer
        thresholds and anything non-numeric are rejected with ValueError.
        """
        field_type = self.__dataclass_fields__[field_name].type
        try:
            if isinstance(value, bool):
                raise TypeError
            if field_type in (int, "int"):
                if isinstance(value, float) and not value.is_integer():
                    raise TypeError
                return int(value)
            if field_type in (float, "float"):
                return float(value)
        except (TypeError, ValueError):
            raise ValueError(
                f"Invalid value for threshold '{field_name}': {value!r}"
            ) from None
        return value

    def to_dict(self) -> dict:
        """Convert thresholds to dictionary.

        Returns:
            Dictionary of all threshold values
        """
        return {
            field_name: getattr(self, field_name)
            for field_name in self.__dataclass_fields__
        }

    def save_to_file(self, path: str) -> None:
        """Save current thresholds to a JSON file.

        Args:
            path: Path to save configuration
        """
        with open(path, 'w') as f:
            json.dump({'thresholds': self.to_dict()}, f, indent=2)


# Global default thresholds instance
default_thresholds = GradingThresholds()
