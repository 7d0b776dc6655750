"""Uvicorn startup for the vacdiag engine."""

from __future__ import annotations

import argparse
import os
import sys


def main(argv: list[str] | None = None) -> None:
    """Start the vacdiag engine server."""
    parser = argparse.ArgumentParser(description="vacdiag Engine Server")
    parser.add_argument("--host", default="127.0.0.1", help="Bind host (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8742, help="Bind port (default: 8742)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument(
        "--cors-origins",
        default=None,
        help="Comma-separated CORS origins (default: CORS disabled)",
    )
    args = parser.parse_args(argv)

    try:
        import uvicorn
    except ImportError:
        print("uvicorn not installed. Run: pip install uvicorn[standard]", file=sys.stderr)
        sys.exit(1)

    if args.cors_origins:
        os.environ["VACDIAG_CORS_ORIGINS"] = args.cors_origins

    uvicorn.run(
        "vacdiag.engine.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
