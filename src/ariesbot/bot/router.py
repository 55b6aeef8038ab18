"""Command router — registration, parameter resolution, and dispatch.

Routing flow for the free-text surface::

    "!rm_user <@42>"
        ↓  parse(): prefix matched, "rm_user" found, args = ("<@42>",)
    Invocation(name="rm_user", args=("<@42>",))
        ↓  dispatch(): "<@42>" resolved through the directory
    rm_user(ctx, user=Member(id=42, ...))  →  ServiceResult
        ↓  render_reply()
    "user bob was deleted"

The structured surface skips ``parse()`` and hands ``dispatch()`` an
invocation whose ``params`` are already typed. Both surfaces share one
descriptor per command.

``dispatch()`` never raises for a failing handler: core errors become
failed results with their own code, anything else becomes
``HANDLER_FAILED``. Only contract violations (an unregistered command
name) propagate.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from ariesbot.bot.descriptors import Invocation
from ariesbot.domain.errors import (
    AriesError,
    DuplicateCommandError,
    InvalidArgumentError,
    UnknownCommandError,
)
from ariesbot.domain.types import Member, ParamKind
from ariesbot.output.renderers import render_reply
from ariesbot.services.result import ServiceResult

if TYPE_CHECKING:
    from ariesbot.bot.context import InvocationContext
    from ariesbot.bot.descriptors import CommandDescriptor, ParamSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reply:
    """Rendered outcome of one invocation."""

    result: ServiceResult
    text: str

    @property
    def ok(self) -> bool:
        return self.result.ok


class Router:
    """Holds the command table for both surfaces."""

    def __init__(self, *, prefix: str = "!", case_insensitive: bool = True) -> None:
        self.prefix = prefix
        self.case_insensitive = case_insensitive
        self._structured: dict[str, CommandDescriptor] = {}
        self._prefixed: dict[str, CommandDescriptor] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, descriptors: Iterable[CommandDescriptor]) -> None:
        """Expose each descriptor on both surfaces. Call once at startup."""
        for descriptor in descriptors:
            key = self._prefix_key(descriptor.name)
            if descriptor.name in self._structured or key in self._prefixed:
                msg = f"Command already registered: {descriptor.name}"
                raise DuplicateCommandError(msg)
            self._structured[descriptor.name] = descriptor
            self._prefixed[key] = descriptor

    @property
    def commands(self) -> list[CommandDescriptor]:
        return list(self._structured.values())

    def get(self, name: str) -> CommandDescriptor:
        """Descriptor for a structured-surface command name."""
        try:
            return self._structured[name]
        except KeyError:
            msg = f"Unknown command: {name}"
            raise UnknownCommandError(msg) from None

    def _prefix_key(self, name: str) -> str:
        return name.lower() if self.case_insensitive else name

    # ------------------------------------------------------------------
    # Free-text surface
    # ------------------------------------------------------------------

    def parse(self, line: str) -> Invocation | None:
        """Turn a chat line into an invocation.

        Returns None when the line lacks the prefix or names no
        registered command; such lines are ordinary chat.
        """
        stripped = line.strip()
        if not stripped.startswith(self.prefix):
            return None
        body = stripped[len(self.prefix) :]
        try:
            tokens = shlex.split(body)
        except ValueError:
            tokens = body.split()
        if not tokens:
            return None

        descriptor = self._prefixed.get(self._prefix_key(tokens[0]))
        if descriptor is None:
            return None
        return Invocation(name=descriptor.name, args=tuple(tokens[1:]))

    def handle_line(self, line: str, ctx: InvocationContext) -> Reply | None:
        """Parse, dispatch, and render one chat line."""
        invocation = self.parse(line)
        if invocation is None:
            return None
        return self.reply(invocation, ctx)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def resolve(self, invocation: Invocation, ctx: InvocationContext) -> dict[str, Any]:
        """Map an invocation onto handler keyword arguments.

        Positional free-text tokens fill parameters in declaration order,
        explicit ``params`` win over tokens, and anything still missing
        falls back to the parameter's enumerated default.
        """
        descriptor = self.get(invocation.name)
        if len(invocation.args) > len(descriptor.params):
            extra = " ".join(invocation.args[len(descriptor.params) :])
            msg = f"unexpected arguments for {descriptor.name}: {extra}"
            raise InvalidArgumentError(msg, command=descriptor.name)

        unknown = sorted(name for name in invocation.params if descriptor.param(name) is None)
        if unknown:
            msg = f"unknown parameters for {descriptor.name}: {', '.join(unknown)}"
            raise InvalidArgumentError(msg, command=descriptor.name)

        raw: dict[str, Any] = dict(zip((p.name for p in descriptor.params), invocation.args))
        raw.update({k: v for k, v in invocation.params.items() if v is not None})

        kwargs: dict[str, Any] = {}
        for spec in descriptor.params:
            if spec.name in raw:
                kwargs[spec.name] = self._convert(spec, raw[spec.name], ctx)
            elif spec.optional:
                kwargs[spec.name] = spec.fallback(ctx)
            else:
                msg = f"missing required parameter: {spec.name}"
                raise InvalidArgumentError(msg, command=descriptor.name)
        return kwargs

    def _convert(self, spec: ParamSpec, value: Any, ctx: InvocationContext) -> Any:
        if spec.kind is ParamKind.TEXT:
            return str(value)
        if isinstance(value, Member):
            return value
        if isinstance(value, int):
            value = str(value)
        member = ctx.directory.resolve_member(ctx.scope, str(value))
        if member is None:
            msg = f"unknown user: {value}"
            raise InvalidArgumentError(msg, param=spec.name)
        return member

    def dispatch(self, invocation: Invocation, ctx: InvocationContext) -> ServiceResult:
        """Run the handler for *invocation*, capturing every failure."""
        descriptor = self.get(invocation.name)
        op = descriptor.name
        with structlog.contextvars.bound_contextvars(
            command=op,
            caller_id=ctx.caller.id,
            scope_id=ctx.scope.id if ctx.scope else None,
        ):
            logger.debug("Dispatching %s", op)
            return self._run(descriptor, invocation, ctx)

    def _run(
        self, descriptor: CommandDescriptor, invocation: Invocation, ctx: InvocationContext
    ) -> ServiceResult:
        op = descriptor.name
        try:
            kwargs = self.resolve(invocation, ctx)
            return descriptor.handler(ctx, **kwargs)
        except AriesError as exc:
            logger.info("Command %s failed: %s (%s)", op, exc.code, exc.message)
            return ServiceResult.failure(op, exc.code, exc.message, **exc.detail)
        except Exception as exc:
            logger.exception("Handler for %s raised", op)
            return ServiceResult.failure(
                op,
                "HANDLER_FAILED",
                f"command {op} failed",
                diagnostic=f"{type(exc).__name__}: {exc}",
            )

    def reply(self, invocation: Invocation, ctx: InvocationContext) -> Reply:
        result = self.dispatch(invocation, ctx)
        text = render_reply(result, expose_diagnostics=ctx.data.expose_diagnostics)
        return Reply(result=result, text=text)

    def dispatch_concurrently(
        self,
        jobs: Sequence[tuple[Invocation, InvocationContext]],
        *,
        max_workers: int = 8,
    ) -> list[Reply]:
        """Handle independent invocations on a thread pool, in input order."""
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(lambda job: self.reply(*job), jobs))

    # ------------------------------------------------------------------
    # Structured surface manifest
    # ------------------------------------------------------------------

    def manifest(self) -> list[dict[str, Any]]:
        """Describe the structured surface for registration with the platform."""
        return [
            {
                "name": d.name,
                "description": d.description,
                "options": [
                    {
                        "name": p.name,
                        "type": str(p.kind),
                        "description": p.description,
                        "required": not p.optional,
                    }
                    for p in d.params
                ],
            }
            for d in self._structured.values()
        ]


def build_router(*, prefix: str = "!", case_insensitive: bool = True) -> Router:
    """Router with every built-in command registered."""
    from ariesbot.bot.handlers import COMMANDS

    router = Router(prefix=prefix, case_insensitive=case_insensitive)
    router.register(COMMANDS)
    return router
