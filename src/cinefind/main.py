"""Entry point for the CineFind local API bridge."""

import uvicorn

from cinefind.app import App
from cinefind.config import Config
from cinefind.logging import setup_logging
from cinefind.web.server import create_fastapi_app


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    fastapi_app = create_fastapi_app(App(config), config)
    # log_config=None leaves uvicorn's loggers to the structlog setup above
    uvicorn.run(fastapi_app, host=config.host, port=config.port, log_config=None, access_log=config.debug)


if __name__ == "__main__":
    main()
