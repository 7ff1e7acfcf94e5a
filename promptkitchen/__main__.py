from __future__ import annotations

import argparse
import logging

import uvicorn

from promptkitchen.service.app import create_app
from promptkitchen.settings import Settings


def main() -> None:
    ap = argparse.ArgumentParser(prog="promptkitchen", description="Prompt enhancement relay")
    ap.add_argument("--host", default=None)
    ap.add_argument("--port", type=int, default=None)
    args = ap.parse_args()

    settings = Settings()
    if args.host is not None:
        settings.host = args.host
    if args.port is not None:
        settings.port = args.port

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info("Server running on port %s", settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
