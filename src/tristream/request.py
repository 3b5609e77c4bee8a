"""Construction of the ModelStreamInfer request."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass

from tritonclient.grpc import service_pb2

from tristream.config import Settings
from tristream.interpreter import REQUESTED_OUTPUTS, OutputLayout

SCALAR_SHAPE = (1, 1)


@dataclass(frozen=True)
class PreparedRequest:
    request: service_pb2.ModelInferRequest
    layout: OutputLayout


def build_conversation(system_prompt: str, prompt: str) -> list[dict[str, str]]:
    turns: list[dict[str, str]] = []
    if system_prompt.strip():
        turns.append({"role": "system", "content": system_prompt})
    turns.append({"role": "user", "content": prompt})
    return turns


def encode_conversation(turns: list[dict[str, str]]) -> bytes:
    """Serialize turns as JSON with unicode and slashes left unescaped."""
    return json.dumps(turns, ensure_ascii=False).encode("utf-8")


def build_request(
    settings: Settings,
    prompt: str,
    max_tokens: int,
    outputs: Sequence[str] = REQUESTED_OUTPUTS,
) -> PreparedRequest:
    layout = OutputLayout.from_requested(outputs)

    request = service_pb2.ModelInferRequest(model_name=settings.router_model, id=settings.request_id)
    _add_bytes_input(request, "conversation", encode_conversation(build_conversation(settings.system_prompt, prompt)))
    _add_bytes_input(request, "model_name", settings.model_name.encode("utf-8"))

    tokens = request.inputs.add(name="max_tokens", datatype="INT32", shape=SCALAR_SHAPE)
    tokens.contents.int_contents.append(max_tokens)

    for name in outputs:
        request.outputs.add(name=name)
    return PreparedRequest(request=request, layout=layout)


def _add_bytes_input(request: service_pb2.ModelInferRequest, name: str, value: bytes) -> None:
    tensor = request.inputs.add(name=name, datatype="BYTES", shape=SCALAR_SHAPE)
    tensor.contents.bytes_contents.append(value)
