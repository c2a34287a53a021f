"""Migration commands for the dbmigrator CLI."""

from ...core.config import MigratorConfig
from ...migrations import Migration, Migrator
from ...store.database import Database


def handle_migrate(args, config: MigratorConfig, pool: list[Migration]) -> None:
    """Handle migrate command.

    Args:
        args: Parsed command arguments.
        config: Runtime configuration.
        pool: Migrations to apply.
    """
    with Database(config.database_url) as db:
        migrated = Migrator(pool, config.table_name).migrate(db)

    _print_names("Migrated", migrated, "Nothing to migrate.")


def handle_rollback(args, config: MigratorConfig, pool: list[Migration]) -> None:
    """Handle rollback command (last batch only)."""
    with Database(config.database_url) as db:
        reverted = Migrator(pool, config.table_name).rollback(db)

    _print_names("Rolled back", reverted, "Nothing was rolled back.")


def handle_revert(args, config: MigratorConfig, pool: list[Migration]) -> None:
    """Handle revert command (every batch)."""
    with Database(config.database_url) as db:
        reverted = Migrator(pool, config.table_name).revert(db)

    _print_names("Reverted", reverted, "Nothing was reverted.")


def handle_status(args, config: MigratorConfig, pool: list[Migration]) -> None:
    """Handle status command."""
    with Database(config.database_url) as db:
        report = Migrator(pool, config.table_name).status(db)

    print(f"Migration table: {config.table_name}")
    print("=" * 50)

    for status in report:
        if status.applied:
            applied_at = status.applied_at.isoformat() if status.applied_at else "-"
            print(f"  [batch {status.batch}] {status.name} ({applied_at})")
        else:
            print(f"  [pending] {status.name}")

    pending = sum(1 for status in report if not status.applied)
    print()
    print(f"Applied: {len(report) - pending}, Pending: {pending}")


def _print_names(verb: str, names: list[str], empty_message: str) -> None:
    if not names:
        print(empty_message)
        return

    for name in names:
        print(f"{verb}: {name}")
