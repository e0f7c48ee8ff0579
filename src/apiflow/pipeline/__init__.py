"""Request/response transform pipeline."""

from .pipeline import ErrorHook, RequestTransform, ResponseTransform, TransformPipeline
from .transforms import (
    UnauthorizedHook,
    build_default_pipeline,
    json_request_transform,
    json_response_transform,
    language_header_transform,
    trace_header_transform,
)

__all__ = [
    "ErrorHook",
    "RequestTransform",
    "ResponseTransform",
    "TransformPipeline",
    "UnauthorizedHook",
    "build_default_pipeline",
    "json_request_transform",
    "json_response_transform",
    "language_header_transform",
    "trace_header_transform",
]
