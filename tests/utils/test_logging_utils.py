import io
import json
import logging

import pytest

from cbinom.utils.logging import JSONFormatter, configure_logging, get_logger


@pytest.fixture
def json_stream():
    stream = io.StringIO()
    handler = configure_logging(logging.DEBUG, stream=stream)
    yield stream
    logging.getLogger("cbinom").removeHandler(handler)
    logging.getLogger("cbinom").setLevel(logging.NOTSET)


def test_formatter_includes_known_fields_only():
    record = logging.LogRecord("cbinom.test", logging.WARNING, __file__, 1, "hello %s", ("there",), None)
    record.stage = "fit"
    record.unrelated = "dropped"
    payload = json.loads(JSONFormatter().format(record))
    assert payload["message"] == "hello there"
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "cbinom.test"
    assert payload["stage"] == "fit"
    assert "unrelated" not in payload
    assert "timestamp" in payload


def test_component_is_stamped(json_stream):
    log = get_logger("cbinom.tests.component", component="density")
    log.info("evaluated", extra={"x": 1.5})
    payload = json.loads(json_stream.getvalue().strip().splitlines()[-1])
    assert payload["component"] == "density"
    assert payload["x"] == 1.5


def test_explicit_component_wins(json_stream):
    log = get_logger("cbinom.tests.explicit", component="density")
    log.info("evaluated", extra={"component": "custom"})
    payload = json.loads(json_stream.getvalue().strip().splitlines()[-1])
    assert payload["component"] == "custom"


def test_filter_added_once():
    a = get_logger("cbinom.tests.once", component="quantile")
    b = get_logger("cbinom.tests.once", component="quantile")
    assert a is b
    assert len(a.filters) == 1


def test_configure_logging_replaces_previous_json_handler():
    first = configure_logging(stream=io.StringIO())
    second = configure_logging(stream=io.StringIO())
    root = logging.getLogger("cbinom")
    try:
        assert first not in root.handlers
        assert second in root.handlers
    finally:
        root.removeHandler(second)
        root.setLevel(logging.NOTSET)


def test_exceptions_are_serialised(json_stream):
    log = get_logger("cbinom.tests.exc")
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        log.exception("failed")
    payload = json.loads(json_stream.getvalue().strip().splitlines()[-1])
    assert "RuntimeError: boom" in payload["exception"]
