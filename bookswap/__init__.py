"""BookSwap: a registry of users, listed books, swap requests and feedback."""

__version__ = "1.0.0"
