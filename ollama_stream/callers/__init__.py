"""Synchronous endpoint callers."""

from .chat_caller import ChatEndpointCaller
from .endpoint_caller import EndpointCaller
from .generate_caller import GenerateEndpointCaller

__all__ = ["EndpointCaller", "ChatEndpointCaller", "GenerateEndpointCaller"]
