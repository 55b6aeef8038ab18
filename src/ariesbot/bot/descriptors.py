"""Command descriptors and invocations.

A :class:`CommandDescriptor` is registered once and shared by both
invocation surfaces, so the prefixed free-text form and the structured
form always agree on names, parameter order, and defaults.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ariesbot.domain.types import ParamDefault, ParamKind

if TYPE_CHECKING:
    from ariesbot.bot.context import InvocationContext
    from ariesbot.services.result import ServiceResult

Handler = Callable[..., "ServiceResult"]


@dataclass(frozen=True)
class ParamSpec:
    """One declared parameter of a command."""

    name: str
    kind: ParamKind
    description: str = ""
    optional: bool = True
    default: ParamDefault = ParamDefault.NONE

    def fallback(self, ctx: InvocationContext) -> Any:
        """Value used when the invocation omits this parameter."""
        if self.default is ParamDefault.CALLER:
            return ctx.caller
        return None


@dataclass(frozen=True)
class CommandDescriptor:
    name: str
    description: str
    handler: Handler
    params: tuple[ParamSpec, ...] = ()

    def param(self, name: str) -> ParamSpec | None:
        for spec in self.params:
            if spec.name == name:
                return spec
        return None


@dataclass(frozen=True)
class Invocation:
    """A single command request.

    Structured invocations fill ``params`` with typed values (``Member``
    for user parameters). Free-text invocations carry raw ``args`` tokens
    that the router maps onto the declared parameters in order.
    """

    name: str
    params: dict[str, Any] = field(default_factory=dict)
    args: tuple[str, ...] = ()
