"""Uvicorn server runner with custom configuration."""

import copy

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from venus.app import App
from venus.config import Config
from venus.logging import log_level_name
from venus.web.server import create_fastapi_app


def build_log_config(config: Config) -> dict:
    """Uvicorn logging config with short formats, at the application's log level."""
    log_config = copy.deepcopy(LOGGING_CONFIG)
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s - "%(request_line)s" %(status_code)s'
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s - %(levelname)s - %(message)s"
    for logger in log_config["loggers"].values():
        logger["level"] = log_level_name(config.debug)
    return log_config


def run_server(app: App, config: Config) -> None:
    """Run the Uvicorn server on the configured host and port."""
    fastapi_app = create_fastapi_app(app, config)
    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=build_log_config(config),
        log_level=log_level_name(config.debug).lower(),
        access_log=True,
    )
