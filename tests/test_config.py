from pathlib import Path

import pytest

from intentbot.config import Config

_ENV_VARS = (
    "DETECTION_METHOD",
    "PATTERN_MIN_CONFIDENCE",
    "CLASSIFIER_MIN_CONFIDENCE",
    "HYBRID_PATTERN_THRESHOLD",
    "HYBRID_CLASSIFIER_THRESHOLD",
    "CLASSIFIER_ENABLED",
    "CLASSIFIER_TIMEOUT_SECONDS",
    "LLM_BASE_URL",
    "LLM_MODEL",
    "MAX_TEXT_LENGTH",
    "LOG_LEVEL",
    "HOST",
    "PORT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in _ENV_VARS:
        # Registers the original value so teardown also undoes load_dotenv writes
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    # Keep load_dotenv from picking up a developer's .env
    monkeypatch.chdir(tmp_path)


def test_defaults(tmp_path: Path) -> None:
    config = Config.from_env(tmp_path / "missing.env")

    assert config == Config()
    assert config.detection_method == "hybrid"
    assert config.max_text_length == 1000
    assert config.port == 3000


def test_reads_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DETECTION_METHOD", "Pattern_Matching")
    monkeypatch.setenv("PATTERN_MIN_CONFIDENCE", "0.5")
    monkeypatch.setenv("CLASSIFIER_ENABLED", "no")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("PORT", "8080")

    config = Config.from_env(tmp_path / "missing.env")

    assert config.detection_method == "pattern_matching"
    assert config.pattern_min_confidence == 0.5
    assert config.classifier_enabled is False
    assert config.log_level == "DEBUG"
    assert config.port == 8080


def test_reads_env_file(tmp_path: Path) -> None:
    env_file = tmp_path / "test.env"
    env_file.write_text("LLM_MODEL=llama3\nMAX_TEXT_LENGTH=200\n")

    config = Config.from_env(env_file)

    assert config.llm_model == "llama3"
    assert config.max_text_length == 200


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("DETECTION_METHOD", "telepathy"),
        ("LOG_LEVEL", "LOUD"),
        ("PATTERN_MIN_CONFIDENCE", "1.5"),
        ("HYBRID_CLASSIFIER_THRESHOLD", "alta"),
        ("CLASSIFIER_ENABLED", "maybe"),
        ("MAX_TEXT_LENGTH", "0"),
        ("PORT", "http"),
    ],
)
def test_invalid_values_raise(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError):
        Config.from_env(tmp_path / "missing.env")
