from argparse import Namespace
from pathlib import Path

import pytest

from pivnet.config import DEFAULT_HOST, ClientConfig, load_config


def _args(**values) -> Namespace:
    base = {
        "config": None,
        "host": None,
        "api_token": None,
        "output_format": None,
        "timeout": None,
        "log_level": None,
        "log_format": None,
    }
    base.update(values)
    return Namespace(**base)


def test_default_config_passes_validation() -> None:
    config = ClientConfig()
    assert config.host == DEFAULT_HOST
    assert config.output_format == "text"


@pytest.mark.parametrize(
    "field,value,error",
    [
        ("host", "network.pivotal.io", "host"),
        ("timeout", 0.0, "timeout"),
        ("output_format", "xml", "output_format"),
        ("log_format", "xml", "log_format"),
        ("log_level", "LOUD", "log_level"),
    ],
)
def test_bounds_enforced(field: str, value: object, error: str) -> None:
    with pytest.raises(ValueError, match=error):
        ClientConfig(**{field: value})


def test_logging_dict_masks_token() -> None:
    logged = ClientConfig(api_token="secret").logging_dict()
    assert logged["api_token"] == "***REDACTED***"


def test_precedence_file_then_env_then_cli(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file = tmp_path / "pivnet.toml"
    config_file.write_text(
        'host = "https://file.example"\n'
        'api-token = "file-token"\n'
        'output_format = "yaml"\n'
        "timeout = 5\n"
    )
    monkeypatch.setenv("PIVNET_API_TOKEN", "env-token")
    monkeypatch.setenv("PIVNET_LOG_LEVEL", "debug")

    config = load_config(_args(config=str(config_file), output_format="json"))

    assert config.host == "https://file.example"
    assert config.api_token == "env-token"
    assert config.output_format == "json"
    assert config.timeout == 5.0
    assert config.log_level == "DEBUG"


def test_config_path_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file = tmp_path / "pivnet.toml"
    config_file.write_text('host = "http://localhost:3000/"\n')
    monkeypatch.setenv("PIVNET_CONFIG", str(config_file))

    assert load_config(_args()).host == "http://localhost:3000"


def test_missing_config_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(_args(config=str(tmp_path / "absent.toml")))


def test_unknown_file_key_is_rejected(tmp_path: Path) -> None:
    config_file = tmp_path / "pivnet.toml"
    config_file.write_text('colour = "blue"\n')

    with pytest.raises(ValueError, match="colour"):
        load_config(_args(config=str(config_file)))
