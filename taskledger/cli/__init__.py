"""TaskLedger CLI: route listing, model scaffolding and the API server.

Entry point registered as ``taskledger`` in ``pyproject.toml``::

    [project.scripts]
    taskledger = "taskledger.cli:main"
"""

import argparse
import sys
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point for the ``taskledger`` command."""
    parser = argparse.ArgumentParser(
        prog="taskledger",
        description="TaskLedger: task list and personal ledger API.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- taskledger routes ------------------------------------------------
    subparsers.add_parser("routes", help="List the application route table")

    # -- taskledger make:model --------------------------------------------
    model_parser = subparsers.add_parser(
        "make:model", help="Create a new SQLAlchemy model module"
    )
    model_parser.add_argument("name", help="Model class name in PascalCase (e.g. Budget)")
    model_parser.add_argument(
        "--directory",
        default=None,
        help="Target directory (default: the taskledger/models package)",
    )

    # -- taskledger serve -------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument("--host", default=None, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    serve_parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart the server when source files change",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from taskledger.cli._routes import run_routes

        run_routes(args)
    elif args.command == "make:model":
        from taskledger.cli._make_model import make_model

        make_model(args)
    elif args.command == "serve":
        from taskledger.cli._serve import run_server

        run_server(args)
