"""Application entry point for the chat room server."""

import structlog

from chatroom.app import App
from chatroom.config import Config
from chatroom.logging import setup_logging
from chatroom.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    structlog.get_logger(__name__).info(
        "starting_chatroom",
        host=config.host,
        port=config.port,
        email_configured=config.resend_api_key is not None,
        base_url=config.base_url,
    )
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
