"""
ThreadBoard Entry Point

Usage:
    python -m threadboard                       # Run the web server
    python -m threadboard init-db               # Create/migrate the database
    python -m threadboard users                 # List registered users
    python -m threadboard delete-user NAME      # Delete a user and their messages
    python -m threadboard config --show         # Configuration helpers
    python -m threadboard --help                # Show help
"""

import argparse
import sys
import logging
from pathlib import Path

from . import __version__
from .config import Config, create_default_config, load_config

USERS_LISTING_LIMIT = 1000


def setup_logging(level: str, log_file: str | None = None):
    """Configure logging for the application."""
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    handlers = [logging.StreamHandler()]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=log_format,
        handlers=handlers
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="threadboard",
        description="ThreadBoard - minimal authenticated message board"
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"ThreadBoard {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=Path("config.toml"),
        help="Path to configuration file (default: config.toml)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: from config, else INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("serve", help="Run the web server (default)")
    subparsers.add_parser("init-db", help="Create or migrate the database")
    subparsers.add_parser("users", help="List registered users")

    delete_parser = subparsers.add_parser(
        "delete-user", help="Delete a user and all of their messages"
    )
    delete_parser.add_argument("username")

    config_parser = subparsers.add_parser("config", help="Configuration helpers")
    config_parser.add_argument("--show", action="store_true", help="Show current config")
    config_parser.add_argument("--validate", action="store_true", help="Validate config")
    config_parser.add_argument("--init", action="store_true", help="Write a default config file")

    return parser


def run_config(args, config: Config) -> int:
    """Handle the config subcommand."""
    if args.init:
        if args.config.exists():
            print(f"{args.config} already exists, not overwriting.")
            return 1
        create_default_config(args.config)
        print(f"Wrote default configuration to {args.config}")
        return 0

    if args.validate:
        errors = config.validate()
        if errors:
            for error in errors:
                print(f"  - {error}")
            return 1
        print("Configuration is valid.")
        return 0

    import toml
    print(toml.dumps(config._to_dict()))
    return 0


def open_database(config: Config):
    from .db.connection import Database
    db = Database(config.database.path)
    db.initialize()
    return db


def open_accounts(config: Config, db):
    from .core.accounts import AccountService
    from .core.crypto import PasswordManager

    passwords = PasswordManager(
        time_cost=config.crypto.argon2_time_cost,
        memory_cost_kb=config.crypto.argon2_memory_kb,
        parallelism=config.crypto.argon2_parallelism
    )
    return AccountService(db, passwords)


def run_users(config: Config, limit: int = USERS_LISTING_LIMIT) -> int:
    """List registered users."""
    from .utils.formatting import format_timestamp, truncate

    db = open_database(config)
    try:
        users = open_accounts(config, db).list_users(limit=limit + 1)
    finally:
        db.close()

    if not users:
        print("No users registered.")
        return 0

    for user in users[:limit]:
        joined = format_timestamp(user.created_at_us, config.board.display_timezone)
        print(f"{user.id:>5}  {user.username:<20} {truncate(user.email, 32):<32} {joined}")

    if len(users) > limit:
        print(f"(showing the first {limit} users)")
    return 0


def run_delete_user(config: Config, username: str) -> int:
    """Delete a user; messages follow by cascade."""
    db = open_database(config)
    try:
        ok, error = open_accounts(config, db).delete_user(username)
    finally:
        db.close()

    if not ok:
        print(error)
        return 1
    print(f"Deleted user '{username}'.")
    return 0


def main(argv=None):
    """Main entry point for ThreadBoard."""
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    setup_logging(args.log_level or config.logging.level, config.logging.file or None)
    logger = logging.getLogger("threadboard")

    if args.command == "config":
        sys.exit(run_config(args, config))

    if args.command == "init-db":
        open_database(config).close()
        logger.info(f"Database ready: {config.database.path}")
        sys.exit(0)

    if args.command == "users":
        sys.exit(run_users(config))

    if args.command == "delete-user":
        sys.exit(run_delete_user(config, args.username))

    # Default: run the web server
    from .core.server import MessageBoard

    for error in config.validate():
        logger.warning(f"Config: {error}")

    try:
        board = MessageBoard(config)
        logger.info(f"Starting ThreadBoard v{__version__}")
        board.run()
    except KeyboardInterrupt:
        logger.info("Shutdown requested")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
