import json
import logging

from pivnet.config import ClientConfig
from pivnet.logging import JsonFormatter, configure_logging, get_logger, redact_mapping


def test_redact_mapping_masks_credentials() -> None:
    redacted = redact_mapping(
        {"Authorization": "Bearer abc", "user-agent": "pivnet-cli", "X-Secret": "s"},
        extra_keys=["x-secret"],
    )

    assert redacted == {
        "Authorization": "***REDACTED***",
        "user-agent": "pivnet-cli",
        "X-Secret": "***REDACTED***",
    }


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord("pivnet.http", logging.DEBUG, __file__, 1, "Sending request", None, None)
    record.method = "GET"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["logger"] == "pivnet.http"
    assert payload["message"] == "Sending request"
    assert payload["method"] == "GET"


def test_debug_logging_redacts_token_and_uses_stderr(api, capsys) -> None:
    configure_logging(ClientConfig(log_level="DEBUG", log_format="json"))
    api.add("GET", "/products", json_body={"products": []})

    with api.client(api_token="top-secret") as client:
        client.products.list()

    out, err = capsys.readouterr()
    assert out == ""
    assert "Sending request" in err
    assert "top-secret" not in err

    configure_logging(ClientConfig())
    assert get_logger("pivnet.http").level == logging.WARNING


def test_json_formatter_redacts_mapping_extras() -> None:
    record = logging.LogRecord("pivnet.http", logging.DEBUG, __file__, 1, "Sending request", None, None)
    record.headers = {"Authorization": "Bearer abc", "Accept": "application/json"}
    record.config = {"api_token": "abc", "host": "http://pivnet.test"}

    payload = json.loads(JsonFormatter().format(record))

    assert payload["headers"] == {"Authorization": "***REDACTED***", "Accept": "application/json"}
    assert payload["config"]["api_token"] == "***REDACTED***"
    assert payload["config"]["host"] == "http://pivnet.test"


def test_redact_mapping_keeps_unset_values() -> None:
    assert redact_mapping({"api_token": None}) == {"api_token": None}
