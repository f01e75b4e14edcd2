"""Application entry point for the keeperauth server."""

from keeperauth.app import App
from keeperauth.config import load_config
from keeperauth.logging import setup_logging
from keeperauth.web.runner import run_server


def main() -> None:
    config = load_config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
