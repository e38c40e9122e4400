"""Guardian and mint chain modules with addresses, decimals, coins and an in-memory context."""

__version__ = "0.1.0"