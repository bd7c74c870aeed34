"""Identity sources for specs, items and risks."""

import uuid
from datetime import datetime, timedelta
from typing import Optional


class UuidIdentitySource:
    """Random UUID4 identifiers and wall-clock timestamps."""

    def new_id(self) -> str:
        return str(uuid.uuid4())

    def now(self) -> datetime:
        return datetime.now()


class SequentialIdentitySource:
    """Predictable identifiers and timestamps for tests.

    Produces ``{prefix}-0001``, ``{prefix}-0002``, ... and a clock that
    advances by ``step`` on every call to ``now()``.
    """

    def __init__(
        self,
        prefix: str = "id",
        start: Optional[datetime] = None,
        step: timedelta = timedelta(seconds=1),
    ):
        self.prefix = prefix
        self._counter = 0
        self._clock = start or datetime(2024, 1, 1, 9, 0, 0)
        self._step = step

    def new_id(self) -> str:
        self._counter += 1
        return f"{self.prefix}-{self._counter:04d}"

    def now(self) -> datetime:
        current = self._clock
        self._clock = self._clock + self._step
        return current
