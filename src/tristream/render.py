"""Channel-aware terminal renderer for streamed fragments."""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import COLOR_SYSTEMS, Console
from rich.style import Style

from tristream.interpreter import DEFAULT_CHANNEL, DecodedFragment

PRIMARY_CHANNELS = frozenset({"content", "final"})
BANNER_STYLE = "bold magenta"
SECONDARY_STYLE = "dim"
ERROR_STYLE = "bold red"


def is_primary_channel(channel: str) -> bool:
    return channel in PRIMARY_CHANNELS


@dataclass
class RenderState:
    """Mutable bookkeeping for one streaming session."""

    last_channel: str = DEFAULT_CHANNEL
    saw_output: bool = False
    line_open: bool = False


class ChannelRenderer:
    """Write fragments to a rich console, marking channel transitions."""

    def __init__(self, console: Console | None = None) -> None:
        self.console: Console = console or Console(highlight=False)

    def render(self, state: RenderState, fragment: DecodedFragment) -> bool:
        """Render one fragment; returns False when there was no text to show.

        The transition decision is taken against ``state.last_channel`` before it
        is advanced to the fragment's channel.
        """
        if not fragment.text:
            return False

        channel = fragment.channel
        previous = state.last_channel
        if is_primary_channel(channel):
            if not is_primary_channel(previous):
                # styled writes close their own span, leaving the line break as the reset
                self.console.out()
            self._write(fragment.text)
        else:
            if channel != previous:
                if state.line_open:
                    self.console.out()
                self.console.out(f"--- {channel} ---", style=BANNER_STYLE, highlight=False)
            self._write(fragment.text, SECONDARY_STYLE)

        self._flush()
        state.last_channel = channel
        state.line_open = not fragment.text.endswith("\n")
        return True

    def finish(self, state: RenderState) -> None:
        """Close out the stream after the final fragment.

        Styled spans from a secondary channel are already closed, so only the
        trailing line break is left to write.
        """
        if state.saw_output:
            self.console.out()
            state.line_open = False
        self._flush()

    def app_error(self, message: str) -> None:
        self.console.out(f"[ERROR] {message}", style=ERROR_STYLE, highlight=False)
        self._flush()

    def stream_error(self, message: str) -> None:
        self.console.out()
        self.console.out(f"[stream error] {message}", style=ERROR_STYLE, highlight=False)
        self._flush()

    def _write(self, text: str, style: str | None = None) -> None:
        """Write model text as received; rich's Text would expand tabs and drop control codes."""
        color_system = COLOR_SYSTEMS.get(self.console.color_system or "") if self.console.is_terminal else None
        if style is not None and color_system is not None:
            text = Style.parse(style).render(text, color_system=color_system)
        self.console.file.write(text)

    def _flush(self) -> None:
        self.console.file.flush()
