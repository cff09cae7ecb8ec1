"""Waiting for the MongoDB server to accept connections.

The bootstrap usually starts next to a database container that is still
booting, so connecting is a loop: build a client, ping the server, and on any
driver error wait and try again. With the default `RetryPolicy` the loop never
gives up and keeps a fixed delay between attempts.
"""
from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from ..config import Settings
from .errors import ConnectionCancelled, ConnectionRetriesExhausted


@dataclass(frozen=True)
class RetryPolicy:
    """How long to wait between connection attempts and when to stop.

    Parameters
    ----------
    interval_seconds:
        Delay after the first failed attempt.
    max_attempts:
        Total attempts before giving up; None retries forever.
    backoff:
        Multiplier applied to the delay after each further failure
        (1.0 keeps it fixed).
    max_interval_seconds:
        Upper bound for the multiplied delay.
    """
    interval_seconds: float = 5
    max_attempts: Optional[int] = None
    backoff: float = 1.0
    max_interval_seconds: float = 300

    def delay_for(self, failures: int) -> float:
        cap = max(self.max_interval_seconds, self.interval_seconds)
        delay = self.interval_seconds
        if self.backoff > 1.0:
            # grow step by step so the delay never overflows past the cap
            for _ in range(failures - 1):
                if delay >= cap:
                    break
                delay *= self.backoff
        return min(delay, cap)

    def exhausted(self, attempts: int) -> bool:
        return self.max_attempts is not None and attempts >= self.max_attempts

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            interval_seconds=settings.RETRY_CONNECTION_SECONDS,
            max_attempts=settings.RETRY_CONNECTION_MAX_ATTEMPTS,
            backoff=settings.RETRY_CONNECTION_BACKOFF,
            max_interval_seconds=settings.RETRY_CONNECTION_MAX_SECONDS,
        )


def _format_seconds(seconds: float) -> str:
    return f"{seconds:g}"


def connect_with_retry(
    uri: str,
    policy: RetryPolicy,
    timeout_seconds: float = 10,
    cancel_event: Optional[threading.Event] = None,
    sleep: Callable[[float], None] = time.sleep,
    client_factory: Callable[..., MongoClient] = MongoClient,
) -> MongoClient:
    """Return a client whose server answered `ping`.

    Every `PyMongoError` counts as a failed attempt, including authentication
    errors, and so does the `ValueError` pymongo raises for an invalid host or
    port in the URI. `ConnectionRetriesExhausted` is raised once the
    policy runs out of attempts, `ConnectionCancelled` when `cancel_event` is
    set while waiting.
    """
    attempts = 0
    while True:
        attempts += 1
        client = None
        try:
            client = client_factory(
                uri, serverSelectionTimeoutMS=int(timeout_seconds * 1000))
            client.admin.command("ping")
            return client
        except (PyMongoError, ValueError) as exc:
            if client is not None:
                client.close()
            print(f"Cannot connect to mongoDB: {exc}")
            if policy.exhausted(attempts):
                raise ConnectionRetriesExhausted(attempts, exc) from exc
            delay = policy.delay_for(attempts)
            print(f"Will retry after {_format_seconds(delay)} seconds")
            if cancel_event is not None:
                if cancel_event.wait(delay):
                    raise ConnectionCancelled(attempts) from exc
            else:
                sleep(delay)


def connect_from_settings(settings: Settings, **kwargs) -> MongoClient:
    return connect_with_retry(
        settings.connection_uri(),
        RetryPolicy.from_settings(settings),
        timeout_seconds=settings.MDM_API_MONGODB_TIMEOUT_SECONDS,
        **kwargs,
    )
