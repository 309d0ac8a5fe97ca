import json
import logging

from coach_gateway.core.logging_setup import JsonFormatter, configure_logging


def test_configure_logging_does_not_stack_handlers():
    configure_logging("INFO")
    configure_logging("DEBUG")
    logger = logging.getLogger("coach_gateway")
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG


def test_json_formatter_emits_one_object_per_record():
    record = logging.LogRecord(
        "coach_gateway.test", logging.ERROR, __file__, 1, "upstream said %s", ("nope",), None
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "ERROR"
    assert payload["name"] == "coach_gateway.test"
    assert payload["msg"] == "upstream said nope"
