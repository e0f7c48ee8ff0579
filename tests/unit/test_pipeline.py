"""Behavior tests for the transform pipeline."""

from __future__ import annotations

import pytest

from apiflow.exceptions import PipelineFrozenError, TransformError
from apiflow.pipeline import TransformPipeline
from apiflow.transport import PendingRequest, TransportResponse


def _request(**overrides) -> PendingRequest:
    values = {"method": "POST", "url": "/things", "headers": {}, "body": None}
    values.update(overrides)
    return PendingRequest(**values)


def test_request_transforms_run_in_registration_order():
    pipeline = TransformPipeline()
    seen = []

    def first(request):
        seen.append(("first", dict(request.headers)))
        request.headers["X-Order"] = "first"
        return request

    def second(request):
        seen.append(("second", dict(request.headers)))
        request.headers["X-Order"] += ",second"
        return request

    pipeline.add_request_transform(first)
    pipeline.add_request_transform(second)

    result = pipeline.apply_request_transforms(_request())

    assert result.headers["X-Order"] == "first,second"
    assert seen == [("first", {}), ("second", {"X-Order": "first"})]


def test_transform_returning_new_object_is_passed_on():
    pipeline = TransformPipeline()
    replacement = _request(body="replaced")

    pipeline.add_request_transform(lambda request: replacement)
    pipeline.add_request_transform(lambda request: request.headers.update({"X-Seen": request.body}))

    result = pipeline.apply_request_transforms(_request(body="original"))

    assert result is replacement
    assert result.headers["X-Seen"] == "replaced"


def test_transform_changing_method_or_url_is_rejected():
    pipeline = TransformPipeline()

    def retarget(request):
        request.url = "/elsewhere"
        return request

    pipeline.add_request_transform(retarget)

    with pytest.raises(TransformError, match="/elsewhere"):
        pipeline.apply_request_transforms(_request())


def test_response_transforms_run_in_order():
    pipeline = TransformPipeline()
    pipeline.add_response_transform(lambda response: TransportResponse(response.status_code, response.data + "a"))
    pipeline.add_response_transform(lambda response: TransportResponse(response.status_code, response.data + "b"))

    result = pipeline.apply_response_transforms(TransportResponse(200, ""))

    assert result.data == "ab"


def test_error_hooks_observe_errors():
    pipeline = TransformPipeline()
    observed = []
    pipeline.add_error_hook(observed.append)
    error = RuntimeError("boom")

    pipeline.apply_error_hooks(error)

    assert observed == [error]


def test_frozen_pipeline_rejects_registration():
    pipeline = TransformPipeline()
    pipeline.add_request_transform(lambda request: request)
    pipeline.freeze()

    assert pipeline.frozen
    with pytest.raises(PipelineFrozenError):
        pipeline.add_request_transform(lambda request: request)
    with pytest.raises(PipelineFrozenError):
        pipeline.add_response_transform(lambda response: response)
    with pytest.raises(PipelineFrozenError):
        pipeline.add_error_hook(lambda error: None)
    assert len(pipeline.request_transforms) == 1


def test_add_transform_returns_function_for_decorator_use():
    pipeline = TransformPipeline()

    @pipeline.add_request_transform
    def tag(request):
        request.headers["X-Tag"] = "1"
        return request

    assert pipeline.request_transforms == (tag,)
