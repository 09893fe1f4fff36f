# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Sequential request handling for long-lived worker hosts.

The wire protocol belongs to the host. This module only turns one argument
vector into one status plus the output printed while handling it, giving
every request its own runner, working area and output capture.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field

from .cli.app import parse_arguments
from .config import ActionConfiguration
from .errors import ConfigurationError
from .runner import FAILURE_STATUS, RequestRunner
from .streams import capture_stdout

ConfigurationParser = Callable[[Sequence[str]], ActionConfiguration]
RunnerFactory = Callable[[], RequestRunner]


@dataclass(frozen=True, slots=True)
class WorkRequest:
    """One unit of work received by the host."""

    arguments: tuple[str, ...]
    request_id: int = 0


@dataclass(frozen=True, slots=True)
class WorkResponse:
    """Result returned to the host for a :class:`WorkRequest`."""

    request_id: int
    exit_code: int
    output: str


@dataclass(slots=True)
class WorkerLoop:
    """Run requests one after another, isolating each from the next."""

    parse: ConfigurationParser = parse_arguments
    runner_factory: RunnerFactory = RequestRunner
    handled: int = field(default=0, init=False)

    def handle(self, request: WorkRequest) -> WorkResponse:
        """Run ``request`` and return its status with the captured output.

        Standard output is captured only for the duration of the request and
        restored afterwards, even when parsing or the pipeline fails.
        """

        with capture_stdout() as buffer:
            try:
                config = self.parse(request.arguments)
            except ConfigurationError as exc:
                print(f"Invalid lint action arguments: {exc}")
                status = FAILURE_STATUS
            else:
                status = self.runner_factory().run(config)
        self.handled += 1
        return WorkResponse(request_id=request.request_id, exit_code=status, output=buffer.getvalue())

    def serve(self, requests: Iterable[WorkRequest]) -> Iterator[WorkResponse]:
        """Yield one response per request, in request order."""

        for request in requests:
            yield self.handle(request)


__all__ = ["WorkRequest", "WorkResponse", "WorkerLoop"]
