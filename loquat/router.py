"""The standard router: picks an adapter from the IDs carried by a package's events."""

from __future__ import annotations

import logging
from typing import Any, Iterator

from loquat.route_types import RouteResult, Router, RouterConfig, RouteState, RouteTarget

_DEFAULT_ROUTER_ID = "standard_router"


def _iter_events(package: Any) -> Iterator[Any]:
    """Yield every event of every group of every block in a package."""
    for block in getattr(package, "blocks", ()):
        for group in getattr(block, "groups", ()):
            yield from getattr(group, "events", ())


def _event_id(event: Any, name: str) -> str | None:
    value = getattr(event, name, None)
    if value is None:
        return None
    return str(value)


class StandardRouter(Router):
    """Routes packages by the channel, group or user IDs of their events.

    A package is read by attribute: ``package.blocks``, each block's ``groups``,
    each group's ``events``; an event may carry ``channel_id``, ``group_id`` and
    ``user_id``, any of which may be missing or ``None``.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        *,
        router_id: str = _DEFAULT_ROUTER_ID,
        config: RouterConfig | None = None,
    ) -> None:
        super().__init__(router_id, config)
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def set_config(self, config: RouterConfig) -> None:
        """Replace the router configuration."""
        self.config = config

    def extract_channel_type(self, package: Any) -> str | None:
        """Return ``channel:<id>``, ``group:<id>`` or ``private:<id>`` from the first event that has one."""
        for event in _iter_events(package):
            channel_id = _event_id(event, "channel_id")
            if channel_id is not None:
                return f"channel:{channel_id}"
            group_id = _event_id(event, "group_id")
            if group_id is not None:
                return f"group:{group_id}"
            user_id = _event_id(event, "user_id")
            if user_id is not None:
                return f"private:{user_id}"
        return None

    def determine_target(self, channel_type: str) -> RouteTarget:
        """Choose the adapter for a channel type, falling back to the default adapter."""
        config = self.config
        specific: str | None = None
        if channel_type.startswith("group:"):
            specific = config.group_adapter
        elif channel_type.startswith("private:"):
            specific = config.private_adapter
        elif channel_type.startswith("channel:"):
            specific = config.channel_adapter
        if specific is not None:
            return RouteTarget.adapter(specific)
        if config.default_adapter is not None:
            return RouteTarget.adapter(config.default_adapter)
        return RouteTarget.none()

    async def route_package(self, package: Any) -> RouteResult:
        """Route one package; routing itself never fails."""
        state = RouteState()
        if self.config.auto_initialize:
            state = state.with_initialized()
        if not self.config.auto_route:
            return RouteResult.succeeded(state)

        package_id = getattr(package, "package_id", None)
        channel_type = self.extract_channel_type(package)
        if channel_type is not None:
            target = self.determine_target(channel_type)
            state = state.with_adapter_target(target).with_channel_type(channel_type)
            self.logger.debug(
                "Routed package %s to %r (channel: %s)", package_id, target, channel_type
            )
            return RouteResult.succeeded(state)

        if self.config.default_adapter is not None:
            state = state.with_adapter_target(RouteTarget.adapter(self.config.default_adapter))
        self.logger.warning(
            "No channel info for package %s, using default route: %r",
            package_id,
            state.adapter_target,
        )
        return RouteResult.succeeded(state)