#!/usr/bin/env python3
"""Command line entry point."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Any, List, Optional

from dotenv import load_dotenv

from .auth import StaticTokenSource
from .bootstrap import create_sender
from .config import ClientConfig, ConfigurationError
from .crud import CrudAction, CrudOperationConfig
from .dispatcher import Route
from .exceptions import ApiflowError
from .services import OrganizationService
from .transport import RESPONSE_ENCODINGS

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apiflow",
        description="Send authenticated API requests with CRUD notifications",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--base-url", help="API base URL (default: APIFLOW_BASE_URL)")
    parser.add_argument("--token", help="Bearer token (default: APIFLOW_TOKEN)")
    parser.add_argument("--locale", help="Accept-Language value for this invocation")
    parser.add_argument(
        "--transport",
        choices=("httpx", "requests"),
        default="httpx",
        help="HTTP library used to send requests",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    send = subparsers.add_parser("send", help="Send a single request")
    send.add_argument("method", help="HTTP method, e.g. GET")
    send.add_argument("path", help="Path relative to the base URL")
    send.add_argument("--data", help="JSON request body")
    send.add_argument("--encoding", choices=RESPONSE_ENCODINGS, default="json", help="Expected response encoding")
    send.add_argument("--kind", help="Wrap the request in a CRUD action of this kind (create/read/update/delete)")
    send.add_argument("--subject", default="Resource", help="Subject name used in CRUD messages")
    send.add_argument("--quiet", action="store_true", help="Suppress pending and success messages")

    orgs = subparsers.add_parser("organizations", help="Organization commands")
    orgs_sub = orgs.add_subparsers(dest="action", required=True)
    orgs_sub.add_parser("list", help="List organizations")
    create = orgs_sub.add_parser("create", help="Create an organization")
    create.add_argument("name")

    return parser


async def run_command(args: argparse.Namespace) -> Any:
    config = ClientConfig.with_defaults(base_url=args.base_url)
    token = args.token or os.environ.get("APIFLOW_TOKEN")
    locale_source = (lambda: args.locale) if args.locale else None

    sender = create_sender(
        config,
        token_source=StaticTokenSource(token),
        transport_kind=args.transport,
        locale_source=locale_source,
    )
    try:
        if args.command == "organizations":
            service = OrganizationService(sender)
            if args.action == "list":
                return await service.get_all()
            organization = await service.create(args.name)
            return organization.model_dump(by_alias=True)

        body = json.loads(args.data) if args.data else None
        route = Route(args.method, args.path)

        def action():
            return sender.send(route, body, args.encoding)

        if not args.kind:
            return await action()

        crud_config = CrudOperationConfig(
            kind=args.kind,
            subject_name=args.subject,
            show_pending=not args.quiet,
            show_success=not args.quiet,
        )
        return await CrudAction(crud_config, action).run()
    finally:
        await sender.dispatcher.transport.close()


def _render(result: Any) -> str:
    if isinstance(result, (bytes, bytearray)):
        return f"<{len(result)} bytes>"
    if isinstance(result, str):
        return result
    return json.dumps(result, indent=2, default=str)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the apiflow CLI."""
    args = build_parser().parse_args(argv)

    # .env in the current working directory, shell environment wins
    load_dotenv()

    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        result = asyncio.run(run_command(args))
    except json.JSONDecodeError as e:
        print(f"Invalid --data JSON: {e}", file=sys.stderr)
        return 2
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        return 2
    except ApiflowError as e:
        logger.error("Request failed (%s): %s", e.error_code, e)
        return 1

    print(_render(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
