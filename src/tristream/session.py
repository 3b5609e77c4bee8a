"""Streaming session driver."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from loguru import logger

from tristream.interpreter import DEFAULT_LAYOUT, AppError, OutputLayout, Skip, interpret
from tristream.render import ChannelRenderer, RenderState
from tristream.transport import TransportError, iterate_steps


class SessionPhase(Enum):
    STREAMING = "streaming"
    DONE = "done"


@dataclass(frozen=True)
class SessionResult:
    succeeded: bool
    saw_output: bool


class StreamingSession:
    """Consume one response stream and render it."""

    def __init__(self, renderer: ChannelRenderer, layout: OutputLayout = DEFAULT_LAYOUT) -> None:
        self.renderer = renderer
        self.layout = layout
        self.state = RenderState()
        self.phase = SessionPhase.STREAMING

    def run(self, responses: Iterable[Any]) -> SessionResult:
        for step in iterate_steps(responses):
            if isinstance(step, TransportError):
                self.renderer.stream_error(step.message)
                self.phase = SessionPhase.DONE
                return SessionResult(succeeded=False, saw_output=self.state.saw_output)
            self._handle(step.message)
            if self.phase is SessionPhase.DONE:
                break
        else:
            logger.warning("Stream closed without a final fragment")
            self.phase = SessionPhase.DONE
        return SessionResult(succeeded=True, saw_output=self.state.saw_output)

    def _handle(self, message: Any) -> None:
        outcome = interpret(message, self.layout)
        if isinstance(outcome, AppError):
            self.renderer.app_error(outcome.message)
            return
        if isinstance(outcome, Skip):
            return

        fragment = outcome.fragment
        if self.renderer.render(self.state, fragment):
            self.state.saw_output = True
        if fragment.is_final:
            self.renderer.finish(self.state)
            self.phase = SessionPhase.DONE


def stream_inference(
    responses: Iterable[Any],
    renderer: ChannelRenderer | None = None,
    layout: OutputLayout = DEFAULT_LAYOUT,
) -> SessionResult:
    session = StreamingSession(renderer or ChannelRenderer(), layout)
    return session.run(responses)
