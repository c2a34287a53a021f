"""Command line interface for dbmigrator."""
