"""Per-message interpretation of ModelStreamInfer responses."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from loguru import logger

from tristream.codec import decode_bool_contents, decode_bytes_contents, decode_raw_bool, decode_raw_string
from tristream.errors import OutputLayoutError

TEXT_OUTPUT = "text_output"
CHANNEL_OUTPUT = "channel"
IS_FINAL_OUTPUT = "is_final"
REQUESTED_OUTPUTS = (TEXT_OUTPUT, CHANNEL_OUTPUT, IS_FINAL_OUTPUT)
DEFAULT_CHANNEL = "content"


@dataclass(frozen=True)
class OutputLayout:
    """Raw buffer position of each requested output."""

    text: int
    channel: int
    is_final: int

    @classmethod
    def from_requested(cls, names: Sequence[str]) -> OutputLayout:
        if len(set(names)) != len(names):
            raise OutputLayoutError(f"Requested outputs contain duplicates: {list(names)}")
        missing = [name for name in REQUESTED_OUTPUTS if name not in names]
        if missing:
            raise OutputLayoutError(f"Requested outputs are missing {', '.join(missing)}")
        positions = {name: index for index, name in enumerate(names)}
        return cls(
            text=positions[TEXT_OUTPUT],
            channel=positions[CHANNEL_OUTPUT],
            is_final=positions[IS_FINAL_OUTPUT],
        )


DEFAULT_LAYOUT = OutputLayout.from_requested(REQUESTED_OUTPUTS)


@dataclass(frozen=True)
class DecodedFragment:
    text: str
    channel: str = DEFAULT_CHANNEL
    is_final: bool = False


@dataclass(frozen=True)
class RawOutputs:
    buffers: Sequence[bytes]


@dataclass(frozen=True)
class StructuredOutputs:
    tensors: Sequence[Any]


OutputsPayload = RawOutputs | StructuredOutputs


@dataclass(frozen=True)
class Fragment:
    fragment: DecodedFragment


@dataclass(frozen=True)
class Skip:
    pass


@dataclass(frozen=True)
class AppError:
    message: str


Interpretation = Fragment | Skip | AppError


def classify_outputs(infer_response: Any) -> OutputsPayload:
    """Pick the payload shape of a single response; raw buffers win when present."""
    if len(infer_response.raw_output_contents) > 0:
        return RawOutputs(list(infer_response.raw_output_contents))
    return StructuredOutputs(list(infer_response.outputs))


def interpret(message: Any, layout: OutputLayout = DEFAULT_LAYOUT) -> Interpretation:
    if message.error_message:
        return AppError(message.error_message)
    if not message.HasField("infer_response"):
        logger.debug("Skipping stream message without an infer response")
        return Skip()

    payload = classify_outputs(message.infer_response)
    if isinstance(payload, RawOutputs):
        return Fragment(decode_raw_outputs(payload.buffers, layout))
    return Fragment(decode_structured_outputs(payload.tensors))


def decode_raw_outputs(buffers: Sequence[bytes], layout: OutputLayout = DEFAULT_LAYOUT) -> DecodedFragment:
    text = _buffer_at(buffers, layout.text)
    channel = _buffer_at(buffers, layout.channel)
    is_final = _buffer_at(buffers, layout.is_final)
    return DecodedFragment(
        text=decode_raw_string(text),
        channel=decode_raw_string(channel) or DEFAULT_CHANNEL,
        is_final=decode_raw_bool(is_final),
    )


def decode_structured_outputs(tensors: Sequence[Any]) -> DecodedFragment:
    text = ""
    channel = ""
    is_final = False
    for tensor in tensors:
        if tensor.name == TEXT_OUTPUT:
            text = decode_bytes_contents(tensor.contents.bytes_contents)
        elif tensor.name == CHANNEL_OUTPUT:
            channel = decode_bytes_contents(tensor.contents.bytes_contents)
        elif tensor.name == IS_FINAL_OUTPUT:
            is_final = decode_bool_contents(tensor.contents.bool_contents)
    return DecodedFragment(text=text, channel=channel or DEFAULT_CHANNEL, is_final=is_final)


def _buffer_at(buffers: Sequence[bytes], index: int) -> bytes:
    if index >= len(buffers):
        return b""
    return buffers[index]
