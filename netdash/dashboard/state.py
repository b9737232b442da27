"""
Dashboard state - the single owned context shared by the poller, the
surface manager and the resize handler.
"""

import asyncio
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .surface import RenderSurface


class PollState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    RENDERED = "rendered"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass
class DashboardState:
    data_url: str
    active_surface: Optional["RenderSurface"] = None
    poll_handle: Optional[asyncio.Task] = None
    poll_state: PollState = PollState.IDLE
    last_error: Optional[str] = None
    last_update: Optional[float] = None
    # Surface replacement is exclusive; web worker threads and the poller share it
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
