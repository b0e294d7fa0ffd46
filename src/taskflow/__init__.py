"""TaskFlow: accounts, sessions and a per-user todo list backed by local storage."""

__version__ = "0.1.0"
