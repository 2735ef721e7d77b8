"""
Per-address resolution policy: resolver rotation with retries
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from .lookup import BaseLookup, LookupFailed
from .models import LookupAttempt, ResolveResult, ResolverEndpoint, RETRY_BACKOFF


class PolicyState(Enum):
    """States of a single address's resolution"""
    TRY_RESOLVER = "try_resolver"
    RETRY = "retry"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class PolicyStep:
    """Current state plus the resolver index and retry index it refers to"""
    state: PolicyState
    resolver_index: int = 0
    retry: int = 0

    @property
    def finished(self) -> bool:
        return self.state in (PolicyState.SUCCESS, PolicyState.FAILED)


class ResolutionPolicy:
    """
    First-success resolver rotation.

    Resolvers are tried in order. Each one gets 1 + retries attempts,
    separated by a fixed backoff, before the next resolver is tried.
    The first attempt returning at least one hostname wins and nothing
    else is tried; if every resolver is exhausted the address fails.
    """

    def __init__(
        self,
        resolvers: Sequence[ResolverEndpoint],
        lookup: BaseLookup,
        retries: int = 1,
        timeout: float = 2.0,
        backoff: float = RETRY_BACKOFF,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.resolvers = tuple(resolvers)
        self.lookup = lookup
        self.retries = retries
        self.timeout = timeout
        self.backoff = backoff
        self._sleep = sleep

    def start(self) -> PolicyStep:
        if not self.resolvers:
            return PolicyStep(PolicyState.FAILED)
        return PolicyStep(PolicyState.TRY_RESOLVER, 0, 0)

    def advance(self, step: PolicyStep, succeeded: bool) -> PolicyStep:
        """Transition after an attempt made in `step`"""
        if step.finished:
            return step
        if succeeded:
            return PolicyStep(PolicyState.SUCCESS, step.resolver_index, step.retry)
        if step.retry < self.retries:
            return PolicyStep(PolicyState.RETRY, step.resolver_index, step.retry + 1)
        if step.resolver_index + 1 < len(self.resolvers):
            return PolicyStep(PolicyState.TRY_RESOLVER, step.resolver_index + 1, 0)
        return PolicyStep(PolicyState.FAILED, step.resolver_index, step.retry)

    def attempt_for(self, address: str, step: PolicyStep) -> LookupAttempt:
        return LookupAttempt(
            address=address,
            endpoint=self.resolvers[step.resolver_index],
            retry=step.retry,
            timeout=self.timeout
        )

    def _try(self, attempt: LookupAttempt) -> list[str]:
        try:
            return self.lookup.lookup(attempt.address, attempt.endpoint, attempt.timeout)
        except LookupFailed:
            return []
        except Exception:
            # A misbehaving backend costs this attempt, not the worker
            return []

    def resolve(self, address: str) -> ResolveResult:
        """
        Run the policy for one address.

        Args:
            address: IP address to resolve

        Returns:
            ResolveResult with hostnames, or with none if every resolver failed
        """
        step = self.start()
        while not step.finished:
            if step.state is PolicyState.RETRY and self.backoff > 0:
                self._sleep(self.backoff)

            attempt = self.attempt_for(address, step)
            hostnames = self._try(attempt)
            if hostnames:
                return ResolveResult(
                    address=address,
                    hostnames=tuple(hostnames),
                    endpoint=attempt.endpoint
                )
            step = self.advance(step, False)

        return ResolveResult(address=address)
