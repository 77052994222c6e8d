"""Request DTOs (pydantic) and body serialization."""

from .requests import ChatRequest, GenerateRequest, RequestBody, force_streaming, model_name, serialize_body

__all__ = ["ChatRequest", "GenerateRequest", "RequestBody", "force_streaming", "model_name", "serialize_body"]
