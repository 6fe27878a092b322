import argparse
import json
import logging
import sys

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.api.dispatch import InvalidArgumentsError, MutationDispatcher
from src.app_shell.config import (
    ConfigurationError,
    Settings,
    configure_logging,
    validate_ops_rules,
)
from src.app_shell.context import ServiceContext
from src.domain.entities import Actor
from src.rules.loader import load_rules

logger = logging.getLogger("cli")


def get_context(settings: Settings) -> ServiceContext:
    try:
        rules = load_rules(settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Could not load rules: %s", e)
        sys.exit(1)
    return ServiceContext.create(settings, rules)


def handle_migrate(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    applied = SQLiteMigrator(settings.db_path, settings.migrations_dir).run_migrations()
    print(f"Applied {len(applied)} migrations.")


def handle_mutation(ctx: ServiceContext, operation: str, args: argparse.Namespace) -> int:
    # The CLI acts as the configured system role
    actor = Actor(id=args.actor, roles=(ctx.rules.ops.system_actor_role,))
    arguments: dict[str, object] = {"user_id": args.user_id}
    if operation == "set_user_roles":
        arguments["roles"] = args.roles

    try:
        response = MutationDispatcher(ctx.account_service).dispatch(actor, operation, arguments)
    except InvalidArgumentsError as e:
        logger.error("%s: %s", e, e.errors)
        return 2
    print(json.dumps(response.model_dump(mode="json"), indent=2))
    return 0 if response.error is None else 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Account Guard CLI")
    parser.add_argument("--actor", default="cli", help="Actor id recorded with failures")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("migrate", help="Apply pending database migrations")

    lock_parser = subparsers.add_parser("lock", help="Lock a user account")
    lock_parser.add_argument("user_id", type=int)

    unlock_parser = subparsers.add_parser("unlock", help="Unlock a user account")
    unlock_parser.add_argument("user_id", type=int)

    roles_parser = subparsers.add_parser("set-roles", help="Replace a user's roles")
    roles_parser.add_argument("user_id", type=int)
    roles_parser.add_argument("roles", nargs="*", help="Roles to assign")

    args = parser.parse_args(argv)

    try:
        settings = Settings()
    except ConfigurationError as e:
        logger.error("%s", e)
        return 2
    configure_logging(settings.log_level)

    if args.command == "migrate":
        handle_migrate(settings)
        return 0

    ctx = get_context(settings)
    try:
        validate_ops_rules(ctx.rules)
    except ConfigurationError as e:
        logger.error("%s", e)
        return 2

    operation = {
        "lock": "lock_user",
        "unlock": "unlock_user",
        "set-roles": "set_user_roles",
    }[args.command]
    return handle_mutation(ctx, operation, args)


if __name__ == "__main__":
    sys.exit(main())
