"""Configuration management for intentbot.

Loads settings from environment variables with sensible defaults.
Supports .env files via python-dotenv.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DETECTION_METHODS = ("pattern_matching", "classifier", "hybrid")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _get_float(
    name: str, default: float, minimum: float = 0.0, maximum: float = 1.0
) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if not minimum <= value <= maximum:
        raise ValueError(f"{name} must be between {minimum} and {maximum}, got {value}")
    return value


def _get_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables."""

    detection_method: str = "hybrid"
    pattern_min_confidence: float = 0.3
    classifier_min_confidence: float = 0.4
    hybrid_pattern_threshold: float = 0.7
    hybrid_classifier_threshold: float = 0.6
    classifier_enabled: bool = True
    llm_base_url: str = "http://localhost:11434/v1"
    llm_model: str = "qwen3:1.7b"
    classifier_timeout_seconds: float = 30.0
    max_text_length: int = 1000
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """Load configuration from environment variables.

        Args:
            env_file: Optional path to .env file. If None, searches for .env
                     in current directory and parent directories.

        Returns:
            Config instance with values from environment.

        Raises:
            ValueError: If an environment variable holds an invalid value.
        """
        # Load .env file if it exists
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()  # Auto-searches for .env

        detection_method = os.getenv("DETECTION_METHOD", "hybrid").strip().lower()
        if detection_method not in DETECTION_METHODS:
            raise ValueError(
                f"Invalid DETECTION_METHOD: {detection_method}. "
                f"Must be one of {DETECTION_METHODS}"
            )

        log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        # Validate log level
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if log_level not in valid_levels:
            raise ValueError(
                f"Invalid LOG_LEVEL: {log_level}. Must be one of {valid_levels}"
            )

        return cls(
            detection_method=detection_method,
            pattern_min_confidence=_get_float("PATTERN_MIN_CONFIDENCE", 0.3),
            classifier_min_confidence=_get_float("CLASSIFIER_MIN_CONFIDENCE", 0.4),
            hybrid_pattern_threshold=_get_float("HYBRID_PATTERN_THRESHOLD", 0.7),
            hybrid_classifier_threshold=_get_float("HYBRID_CLASSIFIER_THRESHOLD", 0.6),
            classifier_enabled=_get_bool("CLASSIFIER_ENABLED", True),
            llm_base_url=os.getenv("LLM_BASE_URL", "http://localhost:11434/v1"),
            llm_model=os.getenv("LLM_MODEL", "qwen3:1.7b"),
            classifier_timeout_seconds=_get_float(
                "CLASSIFIER_TIMEOUT_SECONDS", 30.0, minimum=0.1, maximum=600.0
            ),
            max_text_length=_get_int("MAX_TEXT_LENGTH", 1000),
            log_level=log_level,
            host=os.getenv("HOST", "0.0.0.0"),
            port=_get_int("PORT", 3000, minimum=1),
        )
