"""Routing targets, state, configuration and the router interface."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable


class TargetKind(Enum):
    """The kind of destination a package is routed to."""

    ADAPTER = "Adapter"
    BROADCAST = "Broadcast"
    NONE = "None"


@dataclass(frozen=True)
class RouteTarget:
    """Where a routed package should go."""

    kind: TargetKind
    name: str | None = None

    def __post_init__(self) -> None:
        if self.kind is TargetKind.ADAPTER and self.name is None:
            raise ValueError("an adapter target needs an adapter name")
        if self.kind is not TargetKind.ADAPTER and self.name is not None:
            raise ValueError(f"a {self.kind.value} target takes no name")

    @classmethod
    def adapter(cls, name: str) -> RouteTarget:
        """Target one specific adapter."""
        return cls(TargetKind.ADAPTER, name)

    @classmethod
    def broadcast(cls) -> RouteTarget:
        """Target all adapters."""
        return cls(TargetKind.BROADCAST)

    @classmethod
    def none(cls) -> RouteTarget:
        """No specific target."""
        return cls(TargetKind.NONE)

    def to_json(self) -> str:
        """Serialise in the externally tagged form: {"Adapter": name} or "Broadcast"/"None"."""
        if self.kind is TargetKind.ADAPTER:
            return json.dumps({TargetKind.ADAPTER.value: self.name})
        return json.dumps(self.kind.value)

    @classmethod
    def from_json(cls, text: str) -> RouteTarget:
        """Parse the form produced by :meth:`to_json`."""
        value = json.loads(text)
        if isinstance(value, str):
            if value == TargetKind.BROADCAST.value:
                return cls.broadcast()
            if value == TargetKind.NONE.value:
                return cls.none()
            raise ValueError(f"unknown route target variant: {value!r}")
        if isinstance(value, dict) and len(value) == 1:
            (tag, payload), = value.items()
            if tag == TargetKind.ADAPTER.value and isinstance(payload, str):
                return cls.adapter(payload)
        raise ValueError(f"invalid route target: {text!r}")

    def __repr__(self) -> str:
        if self.kind is TargetKind.ADAPTER:
            return f"Adapter({self.name!r})"
        return self.kind.value


@dataclass(frozen=True)
class RouteState:
    """The routing decision to apply to a package."""

    initialized: bool = False
    adapter_target: RouteTarget = field(default_factory=RouteTarget.none)
    channel_type: str | None = None

    def with_initialized(self) -> RouteState:
        return replace(self, initialized=True)

    def with_adapter_target(self, target: RouteTarget) -> RouteState:
        return replace(self, adapter_target=target)

    def with_channel_type(self, channel_type: str) -> RouteState:
        return replace(self, channel_type=channel_type)


@dataclass(frozen=True)
class RouterConfig:
    """Adapter mappings and switches that steer routing."""

    default_adapter: str | None = None
    group_adapter: str | None = None
    private_adapter: str | None = None
    channel_adapter: str | None = None
    auto_initialize: bool = True
    auto_route: bool = True

    def with_default_adapter(self, adapter: str) -> RouterConfig:
        return replace(self, default_adapter=adapter)

    def with_group_adapter(self, adapter: str) -> RouterConfig:
        return replace(self, group_adapter=adapter)

    def with_private_adapter(self, adapter: str) -> RouterConfig:
        return replace(self, private_adapter=adapter)

    def with_channel_adapter(self, adapter: str) -> RouterConfig:
        return replace(self, channel_adapter=adapter)

    def with_auto_initialize(self, enabled: bool) -> RouterConfig:
        return replace(self, auto_initialize=enabled)

    def with_auto_route(self, enabled: bool) -> RouterConfig:
        return replace(self, auto_route=enabled)


@dataclass(frozen=True)
class RouteResult:
    """Outcome of routing one package."""

    state: RouteState
    success: bool

    @classmethod
    def succeeded(cls, state: RouteState) -> RouteResult:
        return cls(state, True)

    @classmethod
    def failed(cls, state: RouteState) -> RouteResult:
        return cls(state, False)


class Router(ABC):
    """Decides where packages are routed."""

    def __init__(self, router_id: str, config: RouterConfig | None = None) -> None:
        self.router_id = router_id
        self.config = config if config is not None else RouterConfig()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(router_id={self.router_id!r}, config={self.config!r})"

    @abstractmethod
    async def route_package(self, package: Any) -> RouteResult:
        """Route a single package."""

    async def route_batch(self, packages: Iterable[Any]) -> list[RouteResult]:
        """Route packages one after another, in order."""
        return [await self.route_package(package) for package in packages]

    def set_config(self, config: RouterConfig) -> None:
        """Replace the router configuration."""
        self.config = config

    def is_enabled(self) -> bool:
        return self.config.auto_route

    def set_enabled(self, enabled: bool) -> None:
        self.set_config(replace(self.config, auto_route=enabled))