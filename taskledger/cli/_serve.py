"""``taskledger serve``: run the API under uvicorn."""

import argparse

import uvicorn

from taskledger.config import settings


def run_server(args: argparse.Namespace) -> None:
    """Start uvicorn on ``taskledger.main:app``; CLI flags override settings."""
    uvicorn.run(
        "taskledger.main:app",
        host=args.host or settings.backend_host,
        port=args.port or settings.backend_port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
