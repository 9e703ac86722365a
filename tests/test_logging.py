import io
import json
import logging

from typology.core.logging import (
    JsonFormatter,
    configure_logging,
    correlation_context,
    get_correlation_id,
    get_logger,
)


def _capture(name: str):
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    target = logging.getLogger(name)
    target.addHandler(handler)
    target.setLevel(logging.DEBUG)
    return stream, target, handler


def test_json_lines_carry_structured_fields_and_correlation_id():
    stream, target, handler = _capture("typology.test.json")
    try:
        logger = get_logger("typology.test.json", component="engine", preset="default")
        with correlation_context("abc123") as cid:
            assert get_correlation_id() == cid == "abc123"
            logger.info("calculation_complete", extra={"structured_data": {"preset": "accurate", "type": "INTJ"}})
        payload = json.loads(stream.getvalue().strip())
    finally:
        target.removeHandler(handler)

    assert payload["message"] == "calculation_complete"
    assert payload["level"] == "INFO"
    assert payload["correlation_id"] == "abc123"
    assert payload["component"] == "engine"
    # per-call fields win over adapter defaults
    assert payload["preset"] == "accurate"
    assert payload["type"] == "INTJ"


def test_correlation_context_resets_and_generates_ids():
    assert get_correlation_id() is None
    with correlation_context() as generated:
        assert len(generated) == 32
    assert get_correlation_id() is None


def test_configure_logging_is_idempotent():
    root = logging.getLogger()
    configure_logging(environment="test")
    handlers = list(root.handlers)
    configure_logging(environment="prod")
    assert root.handlers == handlers
