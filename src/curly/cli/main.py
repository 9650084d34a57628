# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""cURLy CLI."""

from __future__ import annotations

import argparse
import json
import sys
from types import SimpleNamespace
from typing import Any

from ..config import load_http_settings
from ..errors import CurlyError
from ..log import setup_logging
from ..request import Curly
from ..trust import LocalhostTrustPolicy

METHODS = ("GET", "POST", "PUT", "PATCH")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="curly", description="Send a JSON-over-HTTP request and print the decoded response")
    parser.add_argument("method", type=str.upper, choices=METHODS, help="HTTP verb")
    parser.add_argument("url", help="Target URL")
    parser.add_argument(
        "-d",
        "--data",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Body field (repeatable); required for POST, PUT and PATCH",
    )
    parser.add_argument("--json-body", action="store_true", help="Send the body as JSON instead of form encoding")
    parser.add_argument("--object", action="store_true", help="Decode the response into attribute objects")
    parser.add_argument(
        "--log",
        nargs="?",
        const="",
        default=None,
        metavar="DIR",
        help="Write a wire log file for the request (default directory: CURLY_LOG_DIR or log)",
    )
    auth = parser.add_mutually_exclusive_group()
    auth.add_argument("--bearer", metavar="TOKEN", help="OAUTH bearer token")
    auth.add_argument("--user", metavar="USER:PASS", help="BASIC credentials")
    parser.add_argument("--timeout", type=float, default=None, help="Transport timeout in seconds")
    parser.add_argument(
        "--insecure-localhost",
        action="store_true",
        help="Skip TLS verification for localhost targets (local development only)",
    )
    return parser


def _parse_fields(pairs: list[str]) -> dict[str, str]:
    fields: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"invalid field {pair!r}, expected KEY=VALUE")
        fields[key] = value
    return fields


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, SimpleNamespace):
        return {key: _to_jsonable(inner) for key, inner in vars(value).items()}
    if isinstance(value, list):
        return [_to_jsonable(inner) for inner in value]
    if isinstance(value, dict):
        return {key: _to_jsonable(inner) for key, inner in value.items()}
    return value


def build_request(args: argparse.Namespace) -> Curly:
    settings = load_http_settings()
    transport_options = {"timeout": args.timeout} if args.timeout is not None else {}
    trust_policy = LocalhostTrustPolicy("localhost") if args.insecure_localhost else None

    request = Curly(args.url, transport_options, settings=settings, trust_policy=trust_policy)
    if args.json_body:
        request.set_body_format("JSON")
    if args.object:
        request.set_response_mode("OBJECT")
    if args.log is not None:
        request.set_logging(True, args.log or None)
    if args.bearer:
        request.set_authentication("OAUTH", {"token": args.bearer})
    if args.user:
        username, _, password = args.user.partition(":")
        request.set_authentication("BASIC", {"username": username, "password": password})
    return request


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        fields = _parse_fields(args.data)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))
    if args.method != "GET" and not fields:
        parser.error(f"{args.method} requires at least one --data field")

    try:
        request = build_request(args)
        if args.method == "GET":
            result = request.get()
        else:
            result = getattr(request, args.method.lower())(fields)
    except CurlyError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(_to_jsonable(result), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
