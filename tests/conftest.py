import threading

import pytest

from ptrsweep.lookup import BaseLookup, LookupFailed
from ptrsweep.models import ResolverEndpoint


class FakeLookup(BaseLookup):
    """
    Scripted lookup backend.

    `answers` maps (address, resolver host) to either a list of hostnames
    or a list of per-attempt outcomes (list of lists / None for failure).
    Anything not listed fails.
    """

    def __init__(self, answers=None, default=None):
        self.answers = answers or {}
        self.default = default
        self.calls = []
        self._attempts = {}
        self._lock = threading.Lock()

    def lookup(self, address, endpoint, timeout):
        key = (address, endpoint.host)
        with self._lock:
            self.calls.append((address, endpoint.host, timeout))
            n = self._attempts.get(key, 0)
            self._attempts[key] = n + 1

        answer = self.answers.get(key, self.default)
        if isinstance(answer, tuple):
            # per-attempt script
            answer = answer[n] if n < len(answer) else None
        if callable(answer):
            answer = answer(address, endpoint)
        if not answer:
            raise LookupFailed(f"no answer for {address} from {endpoint.host}")
        return list(answer)

    def calls_for(self, address):
        return [host for addr, host, _ in self.calls if addr == address]


@pytest.fixture
def fake_lookup():
    return FakeLookup()


@pytest.fixture
def endpoints():
    return (
        ResolverEndpoint("10.0.0.1"),
        ResolverEndpoint("10.0.0.2"),
    )
