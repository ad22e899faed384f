"""Exceptions."""


class NoSuchUser(RuntimeError):
    """User does not exist."""


class Unavailable(RuntimeError):
    """The database cannot be reached, or failed to execute a statement."""
