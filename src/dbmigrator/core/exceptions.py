"""Custom exceptions for dbmigrator."""


class MigratorError(Exception):
    """Base exception for all dbmigrator errors."""

    pass


class DatabaseError(MigratorError):
    """Database operation failed."""

    pass


class ConfigurationError(MigratorError):
    """The migration pool is not usable."""

    pass


class NoMigrationDefinedError(ConfigurationError):
    """No migrations defined in the migration pool."""

    def __init__(self) -> None:
        super().__init__("No migrations defined")


class MissingMigrationNameError(ConfigurationError):
    """A migration in the pool has no name."""

    def __init__(self) -> None:
        super().__init__("Missing migration name")


class DuplicateMigrationError(ConfigurationError):
    """A migration name appears more than once in the pool."""

    def __init__(self, name: str):
        """Initialize exception with the duplicated name.

        Args:
            name: First migration name found twice in pool order.
        """
        self.name = name
        super().__init__(f'Migration "{name}" is duplicated in the pool')


class MigrationTableError(MigratorError):
    """Migration tracking table could not be prepared."""

    pass


class TableNotExistsError(MigrationTableError):
    """Migration tracking table is missing."""

    def __init__(self) -> None:
        super().__init__("Migration table does not exist")


class EmptyRollbackStackError(MigratorError):
    """Nothing can be reverted."""

    def __init__(self) -> None:
        super().__init__("Nothing to rollback, there are no migration executed")


class NoSQLCommandsToRunError(MigratorError):
    """A migration has no commands, or one of them renders no SQL."""

    def __init__(self) -> None:
        super().__init__("There are no commands to be executed")
