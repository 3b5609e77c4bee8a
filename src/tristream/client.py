"""Triton streaming client facade."""

from __future__ import annotations

from loguru import logger

from tristream.config import Settings
from tristream.render import ChannelRenderer
from tristream.request import build_request
from tristream.session import SessionResult, StreamingSession
from tristream.transport import TritonTransport


class TritonStreamingClient:
    """Issue a single streaming inference request and render the reply."""

    def __init__(self, settings: Settings, renderer: ChannelRenderer | None = None) -> None:
        self.settings = settings
        self.renderer = renderer or ChannelRenderer()

    def _transport(self) -> TritonTransport:
        return TritonTransport(self.settings.triton_url, timeout=self.settings.timeout_seconds)

    def stream_inference(self, prompt: str, max_tokens: int = 128) -> SessionResult:
        prepared = build_request(self.settings, prompt, max_tokens)
        logger.info(
            "Streaming from {} via {} (backend {}, max_tokens={})",
            self.settings.triton_url,
            self.settings.router_model,
            self.settings.model_name,
            max_tokens,
        )

        with self._transport() as transport:
            call = transport.open_stream(prepared.request)
            try:
                return StreamingSession(self.renderer, prepared.layout).run(call)
            finally:
                call.cancel()
