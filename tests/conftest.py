from __future__ import annotations

import io
from collections.abc import Callable

import pytest
from rich.console import Console
from tritonclient.grpc import service_pb2

from tristream.codec import encode_raw_bool, encode_raw_string
from tristream.render import ChannelRenderer

OutputTensor = service_pb2.ModelInferResponse.InferOutputTensor


def _raw_response(text: str, channel: str = "content", final: bool = False) -> service_pb2.ModelStreamInferResponse:
    infer = service_pb2.ModelInferResponse(
        model_name="llm-router",
        raw_output_contents=[encode_raw_string(text), encode_raw_string(channel), encode_raw_bool(final)],
    )
    return service_pb2.ModelStreamInferResponse(infer_response=infer)


def _structured_response(
    text: str | None = None,
    channel: str | None = None,
    final: bool | None = None,
) -> service_pb2.ModelStreamInferResponse:
    outputs = []
    if text is not None:
        outputs.append(OutputTensor(name="text_output", contents=service_pb2.InferTensorContents(bytes_contents=[text.encode()])))
    if channel is not None:
        outputs.append(OutputTensor(name="channel", contents=service_pb2.InferTensorContents(bytes_contents=[channel.encode()])))
    if final is not None:
        outputs.append(OutputTensor(name="is_final", contents=service_pb2.InferTensorContents(bool_contents=[final])))
    infer = service_pb2.ModelInferResponse(model_name="llm-router", outputs=outputs)
    return service_pb2.ModelStreamInferResponse(infer_response=infer)


@pytest.fixture
def raw_response() -> Callable[..., service_pb2.ModelStreamInferResponse]:
    return _raw_response


@pytest.fixture
def structured_response() -> Callable[..., service_pb2.ModelStreamInferResponse]:
    return _structured_response


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False, color_system=None, width=120)


@pytest.fixture
def renderer(console: Console) -> ChannelRenderer:
    return ChannelRenderer(console)
