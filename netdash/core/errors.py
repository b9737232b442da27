#!/usr/bin/env python3
"""
netdash error taxonomy

Every failure that can happen while turning one poll into a chart maps to
one of these. The poller catches all of them at the poll boundary and
switches the dashboard to the "failed" placeholder; none is fatal.
"""


class DashboardError(Exception):
    """Base class for all poll-cycle errors."""


class TransportError(DashboardError):
    """Fetch rejected: connection failure, timeout or non-2xx response."""

    def __init__(self, message: str, status: int = None):
        super().__init__(message)
        self.status = status


class DecodeError(DashboardError):
    """Response body is not JSON or does not look like a telemetry payload."""


class PayloadContractError(DashboardError):
    """Payload decoded fine but breaks the series/scales contract."""


class NumericError(DashboardError):
    """A maximum or interval computation received non-finite input."""
