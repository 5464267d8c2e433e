import structlog

from chatroom.logging import setup_logging


def test_request_context_is_merged():
    setup_logging(debug=False)
    try:
        processors = structlog.get_config()["processors"]
        assert processors[0] is structlog.contextvars.merge_contextvars
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
    finally:
        structlog.reset_defaults()
