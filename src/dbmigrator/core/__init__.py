"""Core definitions shared across dbmigrator: config, errors and records."""
