"""Personal budgeting backend: identities, budgets and their transaction ledgers."""

__version__ = "0.1.0"
