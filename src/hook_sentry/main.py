"""FastAPI application entry point."""

import argparse
import logging
import os
import sys
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI

from hook_sentry import __version__
from hook_sentry.config import get_settings
from hook_sentry.verification import ConfigurationError, sign_payload
from hook_sentry.webhook import get_verifier
from hook_sentry.webhook import router as webhook_router

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Configure structured logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    setup_logging(settings.log_level)
    # Fail at startup on a bad secret, digest or encoding, not on the first delivery
    options = get_verifier().options
    logger.info(
        f"hook-sentry starting up (algorithm={options.algorithm}, header={options.hmac_header})"
    )
    yield
    logger.info("hook-sentry shutting down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="hook-sentry",
        description="HMAC signature verification for inbound webhooks",
        version=__version__,
        lifespan=lifespan,
    )

    # Include routers
    app.include_router(webhook_router, prefix="/webhook", tags=["webhook"])

    @app.get("/health")
    async def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app


app = create_app()


def _read_body(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def _sign(args: argparse.Namespace) -> int:
    secret = args.secret or os.environ.get("WEBHOOK_SECRET")
    if not secret:
        print("Error: Webhook secret required (--secret or WEBHOOK_SECRET)", file=sys.stderr)
        return 2

    try:
        signature = sign_payload(
            secret,
            _read_body(args.file),
            algorithm=args.algorithm,
            encoding=args.encoding,
        )
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"Error: cannot read {args.file}: {e.strerror or e}", file=sys.stderr)
        return 2

    print(signature)
    return 0


def cli(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="hook-sentry - webhook signature verification")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Start the webhook server")
    serve_parser.add_argument("--host", default=None, help="Host to bind to")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to bind to")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    # Sign command
    sign_parser = subparsers.add_parser("sign", help="Print the signature of a payload")
    sign_parser.add_argument("file", help="Payload file, or - for stdin")
    sign_parser.add_argument(
        "--secret", default=None, help="Webhook secret (or use WEBHOOK_SECRET env)"
    )
    sign_parser.add_argument("--algorithm", default="sha256", help="HMAC digest")
    sign_parser.add_argument("--encoding", default="utf-8", help="Body text encoding")

    args = parser.parse_args(argv)

    if args.command == "serve":
        settings = get_settings()
        setup_logging(settings.log_level)
        uvicorn.run(
            "hook_sentry.main:app",
            host=args.host or settings.host,
            port=args.port or settings.port,
            reload=args.reload,
        )
        return 0
    if args.command == "sign":
        return _sign(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(cli())
