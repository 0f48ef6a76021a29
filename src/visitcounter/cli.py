"""
Process entry points

``visitcounter-api`` serves the counter service, ``visitcounter-web`` serves
the client application and its backend proxy.
"""

import uvicorn

from .adapters.api import create_api
from .config import ApplicationConfig, configure_logging
from .ui.pages import create_web


def run_api() -> None:
    config = ApplicationConfig.from_env()
    configure_logging(config.logging)
    uvicorn.run(create_api(config=config), host=config.api.host, port=config.api.port, log_config=None)


def run_web() -> None:
    config = ApplicationConfig.from_env()
    configure_logging(config.logging)
    uvicorn.run(create_web(config=config), host=config.web.host, port=config.web.port, log_config=None)


if __name__ == "__main__":
    run_api()
