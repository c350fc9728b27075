"""Streams carry a channel's packages through its pools, one pool after another."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable


class Stream(ABC):
    """Processes a channel's packages through its pools in sequence."""

    @property
    @abstractmethod
    def stream_id(self) -> str:
        """The stream's identifier."""

    @property
    @abstractmethod
    def channel_id(self) -> str:
        """The identifier of the channel this stream belongs to."""

    @abstractmethod
    async def process(self, packages: list[Any]) -> list[Any]:
        """Run packages through every pool and return what comes out."""


class StreamProcessor:
    """Feeds packages through a sequence of pools.

    Each pool must provide ``async process_batch(packages) -> packages``.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def __repr__(self) -> str:
        return "StreamProcessor()"

    async def process_sequence(
        self, pools: Iterable[tuple[Any, Any]], packages: list[Any]
    ) -> list[Any]:
        """Pass packages through each ``(pool_type, pool)`` pair in order."""
        current = list(packages)
        for pool_type, pool in pools:
            self.logger.debug(
                "Processing %d packages through %s pool", len(current), pool_type
            )
            current = list(await pool.process_batch(current))
        return current