"""Management commands, run with ``python -m raven.commands.<name>``."""
