"""tristream - stream Triton inference output to the terminal."""

from .client import TritonStreamingClient
from .session import SessionResult, stream_inference

__version__ = "0.1.0"

__all__ = ["SessionResult", "TritonStreamingClient", "stream_inference"]
