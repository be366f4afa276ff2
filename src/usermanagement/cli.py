"""Command line access to the user service.

    usermanagement-cli list
    usermanagement-cli get --id 3
    usermanagement-cli create -u johndoe -f John -l Doe -e john@doe.com -s A [-d IT]
    usermanagement-cli update --id 3 -u johndoe -f John -l Doe -e john@doe.com -s I
    usermanagement-cli delete --id 3

Every command goes through ``services.user``, so validation, uniqueness and
error reporting match the HTTP API. Results are printed as JSON on stdout and
logs go to stderr. Exit status is 1 for a rejected request or store failure
and 2 for usage errors.
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from usermanagement.core.config import get_settings
from usermanagement.core.errors import ValidationFailedError, usermanagementError
from usermanagement.core.logging import configure_logging
from usermanagement.db.session import build_engine
from usermanagement.models.user import USER_ID_MAX
from usermanagement.schemas.user import UserCreate, UserPayload, UserRead, UserUpdate
from usermanagement.services import user as user_service

logger = logging.getLogger(__name__)


def _user_id(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid user ID: {raw!r}")
    if not 0 < value <= USER_ID_MAX:
        raise argparse.ArgumentTypeError(f"invalid user ID: must be between 1 and {USER_ID_MAX}")
    return value


def _add_id(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-i", "--id", type=_user_id, required=True, help="User ID")


def _add_user_fields(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-u", "--username", required=True, help="Username")
    parser.add_argument("-f", "--first-name", required=True, help="First name")
    parser.add_argument("-l", "--last-name", required=True, help="Last name")
    parser.add_argument("-e", "--email", required=True, help="Email address")
    parser.add_argument("-s", "--status", required=True, help="User status (A, I or T)")
    parser.add_argument("-d", "--department", default=None, help="Department")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="usermanagement-cli", description="Manage users")
    parser.add_argument(
        "--dsn",
        default=None,
        help="Database URL (defaults to DATABASE_URL or the POSTGRES_* settings)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List all users")

    get = commands.add_parser("get", help="Get a user by ID")
    _add_id(get)

    create = commands.add_parser("create", help="Create a new user")
    _add_user_fields(create)

    # full replacement, so every field is required as on create
    update = commands.add_parser("update", help="Replace every field of a user")
    _add_id(update)
    _add_user_fields(update)

    delete = commands.add_parser("delete", help="Delete a user by ID")
    _add_id(delete)
    return parser


def _payload(args: argparse.Namespace, model: type[UserPayload]) -> UserPayload:
    return model(
        user_name=args.username,
        first_name=args.first_name,
        last_name=args.last_name,
        email=args.email,
        user_status=args.status,
        department=args.department,
    )


def _as_json(result) -> str:
    if isinstance(result, list):
        body = [UserRead.model_validate(u).model_dump(by_alias=True, mode="json") for u in result]
    else:
        body = UserRead.model_validate(result).model_dump(by_alias=True, mode="json")
    return json.dumps(body, indent=2, ensure_ascii=False)


async def _dispatch(session: AsyncSession, args: argparse.Namespace):
    if args.command == "list":
        users = await user_service.list_users(session)
        logger.info("listing users", extra={"count": len(users)})
        return users
    if args.command == "get":
        return await user_service.get_user_or_404(session, args.id)
    if args.command == "create":
        return await user_service.create_user(session, _payload(args, UserCreate))
    if args.command == "update":
        return await user_service.update_user(session, args.id, _payload(args, UserUpdate))
    await user_service.delete_user(session, args.id)
    return None


async def run(args: argparse.Namespace, out=None) -> int:
    """Execute a parsed command and return the process exit status."""
    out = out or sys.stdout
    settings = get_settings()
    if args.dsn:
        settings = settings.model_copy(update={"database_url": args.dsn})
    engine = build_engine(settings)
    sessions = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    try:
        async with sessions() as session:
            result = await _dispatch(session, args)
            text = None if result is None else _as_json(result)
    except ValidationFailedError as exc:
        for error in exc.fields:
            print(f"Error: {error.field}: {error.message}", file=sys.stderr)
        return 1
    except usermanagementError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        await engine.dispose()
    if text is not None:
        print(text, file=out)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level, settings.app_name, stream=sys.stderr)
    return asyncio.run(run(args))


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
