"""Process entry point: configure logging and run the server under uvicorn.

Run: spa-server --port 3000   (or: python -m spa_server.serve)
"""

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from spa_server.config import Settings
from spa_server.main import create_app

logger = logging.getLogger("spa_server")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Static file server with SPA fallback routing")
    parser.add_argument("--host", help="Interface to bind (default: $HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="TCP port to bind (default: $PORT or 3000)")
    parser.add_argument("--client-dir", help="Client build root (default: build/client)")
    parser.add_argument("--public-dir", help="Public files root (default: public)")
    parser.add_argument("--log-level", help="Log level (default: info)")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Environment settings with any command-line flags layered on top."""
    overrides = {
        "HOST": args.host,
        "PORT": args.port,
        "CLIENT_DIR": args.client_dir,
        "PUBLIC_DIR": args.public_dir,
        "LOG_LEVEL": args.log_level,
    }
    return Settings(**{k: v for k, v in overrides.items() if v is not None})


def main(argv: Optional[List[str]] = None) -> None:
    settings = build_settings(parse_args(argv))
    level = settings.LOG_LEVEL.lower()

    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(settings)
    logger.info(f"Website static server listening on {settings.HOST}:{settings.PORT}")
    try:
        uvicorn.run(
            app,
            host=settings.HOST,
            port=settings.PORT,
            log_level=level,
            # The Server header comes from CommonHeadersMiddleware
            server_header=False,
        )
    except SystemExit as e:
        # uvicorn exits with status 1 when the socket cannot be bound
        if e.code:
            logger.critical(f"server error: could not serve on {settings.HOST}:{settings.PORT}")
            sys.exit(1)
        raise


if __name__ == "__main__":
    main()
