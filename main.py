"""Command-line interface for the user directory service."""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from userdir.config import SeedError, Settings, load_seed_users, load_settings

logger = logging.getLogger("userdir.main")


def _parse_args(argv: Sequence[str] | None, settings: Settings | None = None) -> argparse.Namespace:
    settings = settings or Settings()

    parser = argparse.ArgumentParser(description="User directory utilities")
    subparsers = parser.add_subparsers(dest="command")

    parser.set_defaults(command="serve")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP user directory")
    serve_parser.add_argument("--host", default=settings.host, help="Bind address for the web UI")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help=f"Port for the web UI (default: {settings.port})",
    )

    seed_parser = subparsers.add_parser(
        "check-seed", help="Validate a YAML seed file without starting the service"
    )
    seed_parser.add_argument("path", type=Path, help="Path to the seed file")

    args_list = list(argv) if argv is not None else sys.argv[1:]
    known_commands = {"serve", "check-seed"}

    if not args_list:
        args_list = ["serve"]
    else:
        first = args_list[0]
        if first in ("-h", "--help"):
            return parser.parse_args(args_list)
        if first not in known_commands:
            if any(flag in args_list for flag in ("-h", "--help")):
                return parser.parse_args(args_list)
            args_list = ["serve", *args_list]

    return parser.parse_args(args_list)


def _serve(*, settings: Settings, host: str, port: int) -> None:
    from userdir.application import create_application
    import uvicorn

    logger.info("Starting user directory on http://%s:%s", host, port)

    app = create_application(settings=settings)
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
    )


def _check_seed(path: Path) -> int:
    try:
        users = load_seed_users(path)
    except FileNotFoundError:
        print(f"Seed file not found: {path}")
        return 1
    except SeedError as exc:
        print(f"Seed file is invalid: {exc}")
        return 1

    if not users:
        print("Seed file is valid but defines no users.")
        return 0

    print(f"{len(users)} user(s) found:")
    print(f"{'#':>4}  {'Name':<22}  {'Email':<32}  Age")
    print("-" * 68)
    for index, user in enumerate(users, start=1):
        name = f"{user.first_name} {user.last_name}"
        age = "" if user.age is None else str(user.age)
        print(f"{index:>4}  {name:<22}  {user.email:<32}  {age}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for CLI usage."""

    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    args = _parse_args(argv, settings)

    if args.command == "serve":
        _serve(settings=settings, host=args.host, port=args.port)
    elif args.command == "check-seed":
        return _check_seed(args.path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
