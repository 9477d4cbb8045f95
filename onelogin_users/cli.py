"""Command line wrapper around the OneLogin users client."""
from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import List, Optional

import requests

from .config.settings import load_settings
from .exceptions import ConfigurationError, OneLoginError
from .models import User, UserQuery
from .users import create_client_with_token

PROFILE_FIELDS = ("username", "email", "firstname", "lastname", "title", "department", "company", "phone")
QUERY_FIELDS = ("email", "firstname", "lastname", "username", "samaccountname", "directory_id",
                "external_id", "app_id", "user_ids", "fields", "since", "until")


def _add_profile_args(parser: argparse.ArgumentParser) -> None:
    for name in PROFILE_FIELDS:
        parser.add_argument(f"--{name}")


def _user_from_args(args: argparse.Namespace, user_id: Optional[int] = None) -> User:
    values = {name: getattr(args, name) for name in PROFILE_FIELDS if getattr(args, name) is not None}
    return User(id=user_id, **values)


def _emit(data) -> None:
    print(json.dumps(data, indent=2, sort_keys=True))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="OneLogin users helper")
    parser.add_argument("--url", help="API base URL (default: ONELOGIN_URL or the region host)")
    parser.add_argument("--region", help="OneLogin region, e.g. us or eu (default: ONELOGIN_REGION)")
    parser.add_argument("--token", help="Access token (default: /run/secrets or ONELOGIN_ACCESS_TOKEN)")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds (default: ONELOGIN_TIMEOUT)")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="cmd")

    sq = sub.add_parser("query")
    sq.add_argument("--limit", type=int)
    for name in QUERY_FIELDS:
        sq.add_argument(f"--{name.replace('_', '-')}", dest=name)

    sg = sub.add_parser("get")
    sg.add_argument("--id", type=int, required=True)

    sc = sub.add_parser("create")
    _add_profile_args(sc)

    su = sub.add_parser("update")
    su.add_argument("--id", type=int, required=True)
    _add_profile_args(su)

    sd = sub.add_parser("destroy")
    sd.add_argument("--id", type=int, required=True)

    sl = sub.add_parser("logout")
    sl.add_argument("--id", type=int, required=True)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.cmd:
        parser.print_help()
        return

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(name)s] %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_settings(host=args.url, region=args.region, access_token=args.token, timeout=args.timeout)
    except ConfigurationError as e:
        parser.error(str(e))
    users = create_client_with_token(config.host, config.access_token, timeout=config.timeout)

    try:
        if args.cmd == "query":
            criteria = UserQuery(limit=args.limit, **{name: getattr(args, name) for name in QUERY_FIELDS})
            _emit([user.to_dict() for user in users.query(criteria)])
        elif args.cmd == "get":
            _emit(users.get_one(args.id).to_dict())
        elif args.cmd == "create":
            _emit(users.create(_user_from_args(args)).to_dict())
        elif args.cmd == "update":
            _emit(users.update(_user_from_args(args, user_id=args.id)).to_dict())
        elif args.cmd == "destroy":
            users.destroy(args.id)
            print(f"[users] Deleted user {args.id}", file=sys.stderr)
        elif args.cmd == "logout":
            users.logout(args.id)
            print(f"[users] Logged out user {args.id}", file=sys.stderr)
    except (OneLoginError, requests.RequestException) as e:
        print(f"[users] Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
