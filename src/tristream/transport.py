"""gRPC transport for Triton's ModelStreamInfer call."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

import grpc
from loguru import logger
from tritonclient.grpc import service_pb2, service_pb2_grpc


@dataclass(frozen=True)
class Received:
    message: Any


@dataclass(frozen=True)
class TransportError:
    message: str
    code: str | None = None


StreamStep = Received | TransportError


def iterate_steps(responses: Iterable[Any]) -> Iterator[StreamStep]:
    """Turn the response iterator into steps; a failure of the call ends the sequence."""
    try:
        iterator = iter(responses)
        for message in iterator:
            yield Received(message)
    except grpc.RpcError as exc:
        code, details = _describe_rpc_error(exc)
        logger.debug("ModelStreamInfer failed with {}: {}", code, details)
        yield TransportError(message=details, code=code)
    except Exception as exc:
        logger.debug("ModelStreamInfer iterator raised {}: {}", type(exc).__name__, exc)
        yield TransportError(message=str(exc) or type(exc).__name__)


def _describe_rpc_error(exc: grpc.RpcError) -> tuple[str | None, str]:
    code = exc.code() if callable(getattr(exc, "code", None)) else None
    details = exc.details() if callable(getattr(exc, "details", None)) else None
    code_name = getattr(code, "name", None)
    return code_name, details or str(exc) or "RPC failed"


class TritonTransport:
    """Owns the insecure channel to one Triton endpoint."""

    def __init__(self, target: str, timeout: float | None = None) -> None:
        self.target = target
        self.timeout = timeout
        self._channel: grpc.Channel | None = None

    def __enter__(self) -> TritonTransport:
        logger.debug("Opening gRPC channel to {}", self.target)
        self._channel = grpc.insecure_channel(self.target)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        _ = (exc_type, exc, tb)
        self.close()

    def close(self) -> None:
        if self._channel is not None:
            self._channel.close()
            self._channel = None

    def open_stream(self, request: service_pb2.ModelInferRequest) -> Any:
        """Send one request and return the call, which iterates over responses."""
        if self._channel is None:
            raise RuntimeError("Transport is not open. Use it as a context manager.")
        stub = service_pb2_grpc.GRPCInferenceServiceStub(self._channel)
        logger.debug("Calling ModelStreamInfer on model {}", request.model_name)
        return stub.ModelStreamInfer(iter([request]), timeout=self.timeout)
