#!/usr/bin/env python3

from db.manager import (
    apply_pending_migrations,
    get_available_migrations,
    get_pending_migrations,
)
from logger import get_logger

logger = get_logger()


def _skip_for_local_storage(db_manager) -> bool:
    if db_manager.config.storage_backend == "local":
        logger.info(
            f"Storage backend is 'local' ({db_manager.config.local_store_path}); "
            "there is no database to migrate."
        )
        return True
    return False


def cmd_status(args, db_manager):
    """Show which schema migrations are applied."""
    if _skip_for_local_storage(db_manager):
        return

    db_path = db_manager.get_db_path()
    if not db_path.exists():
        logger.info(f"No database at {db_path}. Run 'finboard migrate apply' to create it.")
        return

    available = get_available_migrations(db_manager)
    with db_manager.connect() as conn:
        pending = get_pending_migrations(conn, db_manager)

    logger.info(f"Database: {db_path}")
    logger.info("=" * 60)
    for migration in available:
        logger.info(f"{migration:<40} {'PENDING' if migration in pending else 'applied'}")
    logger.info(f"\n{len(available) - len(pending)} of {len(available)} migration(s) applied.")


def cmd_apply(args, db_manager):
    """Apply pending migrations, or list them with --dry-run."""
    if _skip_for_local_storage(db_manager):
        return

    if args.dry_run:
        with db_manager.connect() as conn:
            pending = get_pending_migrations(conn, db_manager)
        if not pending:
            logger.info("Schema is up to date.")
        for migration in pending:
            logger.info(f"Would apply: {migration}")
        return

    applied = apply_pending_migrations(db_manager)
    if not applied:
        logger.info("Schema is up to date.")
        return
    logger.info(f"✓ Applied {len(applied)} migration(s) to {db_manager.get_db_path()}")


def setup_parser(subparsers):
    """Setup migrate subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "migrate",
        help="Database migrations",
        description="Create or upgrade the SQLite schema (no-op for local storage)",
    )

    migrate_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available migration commands",
        dest="subcommand",
        required=True,
    )

    status_parser = migrate_subparsers.add_parser("status", help="Show migration status")
    status_parser.set_defaults(func=cmd_status)

    apply_parser = migrate_subparsers.add_parser("apply", help="Apply pending migrations")
    apply_parser.add_argument(
        "--dry-run", action="store_true", help="List pending migrations without applying"
    )
    apply_parser.set_defaults(func=cmd_apply)
