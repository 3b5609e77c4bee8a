"""Command line entry point for tristream."""

from __future__ import annotations

from typing import Optional

import typer

from tristream.client import TritonStreamingClient
from tristream.config import get_settings
from tristream.errors import TristreamError
from tristream.logging_utils import configure_logging

DEFAULT_PROMPT = "Sag hi in einem kurzen Satz."
DEFAULT_MAX_TOKENS = 128

app = typer.Typer(
    name="tristream",
    help="Stream one inference request from a Triton server to the terminal.",
    add_completion=False,
)


@app.command()
def run(
    prompt: str = typer.Argument(DEFAULT_PROMPT, help="Prompt text sent as the user turn"),
    max_tokens: int = typer.Argument(DEFAULT_MAX_TOKENS, min=1, help="Generation budget"),
    url: Optional[str] = typer.Option(None, "--url", help="Triton gRPC endpoint (TRITON_URL)"),
    model: Optional[str] = typer.Option(None, "--model", help="Backend model name (MODEL_NAME)"),
    router_model: Optional[str] = typer.Option(None, "--router-model", help="Router model name (ROUTER_MODEL)"),
    system_prompt: Optional[str] = typer.Option(None, "--system-prompt", help="System turn (SYSTEM_PROMPT)"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Call deadline in seconds (TIMEOUT_SECONDS)"),
) -> None:
    """Send PROMPT and render the streamed reply."""
    try:
        settings = get_settings(
            triton_url=url,
            model_name=model,
            router_model=router_model,
            system_prompt=system_prompt,
            timeout_seconds=timeout,
        )
    except TristreamError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(2) from exc

    configure_logging(settings.log_level)
    result = TritonStreamingClient(settings).stream_inference(prompt, max_tokens)
    if not result.succeeded:
        raise typer.Exit(1)


def main() -> None:
    app()
