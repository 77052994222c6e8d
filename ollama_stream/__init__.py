"""ollama_stream package

Client-side adapter for an Ollama-style inference server: sends chat and
generate requests, decodes the newline-delimited JSON stream, and returns
either one blocking :class:`OllamaResult` or a live
:class:`AsyncResultStreamer`.

Public API (re-exported):
    - Version: ``__version__``
    - Facade: :class:`OllamaClient`
    - Callers: :class:`ChatEndpointCaller`, :class:`GenerateEndpointCaller`,
      :class:`EndpointCaller`
    - Async: :class:`AsyncResultStreamer`, :class:`ResultStream`
    - Models: :class:`ChatRequest`, :class:`GenerateRequest`,
      :class:`ChatMessage`, :class:`ChatResponseModel`,
      :class:`GenerateResponseModel`, :class:`OllamaResult`
    - Credentials: :class:`BasicAuth`
    - Errors: :class:`OllamaError`, :class:`ProtocolError`,
      :class:`TransportError`, :class:`DecodeError`, :class:`ErrorCode`
"""

from .base.auth import BasicAuth
from .base.dto import ChatRequest, GenerateRequest
from .base.errors import DecodeError, ErrorCode, OllamaError, ProtocolError, TransportError
from .base.models import ChatMessage, ChatResponseModel, GenerateResponseModel, OllamaResult
from .base.streaming import AsyncResultStreamer, ResultStream, StreamObserver
from .callers import ChatEndpointCaller, EndpointCaller, GenerateEndpointCaller
from .client import OllamaClient

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "OllamaClient",
    "EndpointCaller",
    "ChatEndpointCaller",
    "GenerateEndpointCaller",
    "AsyncResultStreamer",
    "ResultStream",
    "StreamObserver",
    "ChatRequest",
    "GenerateRequest",
    "ChatMessage",
    "ChatResponseModel",
    "GenerateResponseModel",
    "OllamaResult",
    "BasicAuth",
    "OllamaError",
    "ProtocolError",
    "TransportError",
    "DecodeError",
    "ErrorCode",
]
