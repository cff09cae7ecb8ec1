"""Failures that stop the bootstrap before it touches the database."""


class InitializerError(Exception):
    """Base class for bootstrap failures handled by the CLI."""


class ConnectionRetriesExhausted(InitializerError):
    def __init__(self, attempts: int, last_error: Exception):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Cannot connect to mongoDB after {attempts} attempt(s): {last_error}")


class ConnectionCancelled(InitializerError):
    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            f"Connection to mongoDB cancelled after {attempts} attempt(s)")
