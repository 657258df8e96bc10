"""
Run the restaurant directory server:

    python -m restaurant_directory

Listens on $PORT (default 8000).
"""
from __future__ import annotations

import logging

import uvicorn

from .config import DEFAULT_APP_CONFIG


def main() -> None:
    config = DEFAULT_APP_CONFIG
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Server starting on port %d", config.port)
    uvicorn.run(
        "restaurant_directory.app:app",
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
