"""Application entry point for the Venus backend server."""

from venus.app import App
from venus.config import Config
from venus.logging import setup_logging
from venus.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
