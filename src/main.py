"""Entry point — wires Config → logging → FastAPI app → uvicorn."""
import logging

import uvicorn
from rich.logging import RichHandler

from src.config import Config
from src.constants import MSG_SERVER_STARTING
from src.server import create_app


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def main() -> None:
    config = Config.from_env()
    _setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info(MSG_SERVER_STARTING, config.host, config.port)

    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)


if __name__ == "__main__":
    main()
