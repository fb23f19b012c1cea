"""Tests for the pipeline orchestrator."""

import numpy as np
import pytest

from imagetools.engine.pipeline import (
    Pipeline,
    PipelineConfig,
    PipelineContext,
    Step,
    create_pipeline,
    parse_steps,
)
from imagetools.engine.registry import Category, OperatorRegistry, OperatorSpec
from imagetools.errors import UnknownOperator


def _registry() -> OperatorRegistry:
    reg = OperatorRegistry()
    reg.register(OperatorSpec(id="double", category=Category.ARITHMETIC, fn=lambda image: image * 2))
    reg.register(
        OperatorSpec(id="shift", category=Category.ARITHMETIC, fn=lambda image, by=1.0: image + by)
    )

    def fail(image):
        raise ValueError("test error")

    reg.register(OperatorSpec(id="fail", category=Category.INTENSITY, fn=fail))
    return reg


def test_pipeline_runs_steps_in_order():
    pipeline = Pipeline(registry=_registry())
    ctx = pipeline.run(np.ones((2, 3)), [Step("double"), Step("shift", {"by": 3.0})])
    np.testing.assert_array_equal(ctx.image, np.full((2, 3), 5.0))
    assert ctx.image.dtype == np.float32
    assert ctx.completed == ["0:double", "1:shift"]
    assert ctx.succeeded
    assert set(ctx.timings) == {"0:double", "1:shift"}


def test_pipeline_handles_errors():
    pipeline = Pipeline(registry=_registry())
    ctx = pipeline.run(np.ones((2, 2)), [Step("fail"), Step("double")])
    assert "0:fail" in ctx.errors
    assert "test error" in ctx.errors["0:fail"]
    assert ctx.completed == ["1:double"]
    assert not ctx.succeeded
    # the failed step left the image untouched
    np.testing.assert_array_equal(ctx.image, np.full((2, 2), 2.0))


def test_stop_on_error():
    pipeline = Pipeline(registry=_registry(), config=PipelineConfig(stop_on_error=True))
    ctx = pipeline.run(np.ones((2, 2)), [Step("fail"), Step("double")])
    assert ctx.completed == []
    np.testing.assert_array_equal(ctx.image, np.ones((2, 2)))


def test_unknown_operator_is_recorded():
    pipeline = Pipeline(registry=_registry())
    ctx = pipeline.run(np.ones((2, 2)), [Step("nope")])
    assert ctx.errors == {"0:nope": str(UnknownOperator("nope"))}


def test_bad_parameters_are_recorded():
    pipeline = Pipeline(registry=_registry())
    ctx = pipeline.run(np.ones((2, 2)), [Step("double", {"bogus": 1})])
    assert "0:double" in ctx.errors


def test_normalise_output():
    pipeline = Pipeline(registry=_registry(), config=PipelineConfig(normalise_output=True))
    ctx = pipeline.run(np.array([[1.0, 3.0], [5.0, 9.0]]), [Step("double")])
    np.testing.assert_allclose(ctx.image, [[0.0, 0.25], [0.5, 1.0]])


def test_run_streaming_yields_progress():
    pipeline = Pipeline(registry=_registry())
    ctx = PipelineContext(image=np.ones((2, 2), dtype=np.float32))
    events = list(pipeline.run_streaming(ctx, [{"op": "double"}, {"op": "fail"}]))
    assert [e["step"] for e in events] == ["0:double", "1:fail"]
    assert [e["status"] for e in events] == ["ok", "error"]
    assert events[1]["error"] == "test error"
    assert all(e["total"] == 2 for e in events)


def test_parse_steps_accepts_dicts_and_steps():
    steps = parse_steps([Step("a"), {"op": "b", "params": {"x": 1}}, {"op": "c"}])
    assert steps == [Step("a"), Step("b", {"x": 1}), Step("c")]
    with pytest.raises(KeyError):
        parse_steps([{"params": {}}])


def test_builtin_pipeline(square):
    pipeline = create_pipeline()
    ctx = pipeline.run(
        square * 200.0,
        [
            {"op": "normalise"},
            {"op": "single_threshold", "params": {"threshold": 0.5}},
            {"op": "erode", "params": {"size": 3}},
        ],
    )
    assert ctx.succeeded
    assert ctx.image.sum() == 25.0


def test_builtin_filters_chain(noise):
    ctx = create_pipeline(PipelineConfig(normalise_output=True)).run(
        noise,
        [
            {"op": "gaussian_blur", "params": {"size": 3, "sigma": 1.0}},
            {"op": "gradient_magnitude"},
            {"op": "dual_threshold", "params": {"low": "mean", "high": 1.0}},
            {"op": "convolve", "params": {"kernel": "box", "size": 3}},
            {"op": "separable_convolve", "params": {"kernel": "sobel_y"}},
            {"op": "divide", "params": {"value": 0.0}},
        ],
    )
    assert ctx.succeeded, ctx.errors
    assert ctx.image.shape == noise.shape
    assert np.all(ctx.image == 0.0)


def test_builtin_unknown_kernel_is_recorded(noise):
    ctx = create_pipeline().run(noise, [{"op": "convolve", "params": {"kernel": "emboss"}}])
    assert "kernel:emboss" in ctx.errors["0:convolve"]


def test_oversized_kernel_is_rejected(square, monkeypatch):
    from imagetools.config import settings

    monkeypatch.setattr(settings, "max_kernel_size", 7)
    pipeline = create_pipeline()
    ctx = pipeline.run(
        square,
        [
            {"op": "erode", "params": {"size": 1500}},
            {"op": "gaussian_blur", "params": {"size": 9}},
            {"op": "convolve", "params": {"kernel": "box", "size": 0}},
            {"op": "dilate", "params": {"size": 7}},
        ],
    )
    assert "between 1 and 7" in ctx.errors["0:erode"]
    assert "1:gaussian_blur" in ctx.errors
    assert "2:convolve" in ctx.errors
    assert ctx.completed == ["3:dilate"]


def test_kernel_size_must_be_an_integer(square):
    ctx = create_pipeline().run(square, [{"op": "erode", "params": {"size": "big"}}])
    assert "integer" in ctx.errors["0:erode"]
