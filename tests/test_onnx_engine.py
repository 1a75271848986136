import json

import numpy as np
import pytest

from crop_ocr.engines.onnx_engine import OnnxEngine
from crop_ocr.errors import InferenceError, ModelLoadError
from crop_ocr.ocr.recognizer import TextRecognizer

onnx = pytest.importorskip("onnx")
from onnx import TensorProto, helper  # noqa: E402

SHAPE = (1, 1, 32, 384)


def column_model(input_dims) -> bytes:
    """[1, 1, H, W] -> [W, 1, 2]: class 0 scores column brightness, class 1 darkness."""

    one = helper.make_tensor("one", TensorProto.FLOAT, [], [1.0])
    nodes = [
        helper.make_node("ReduceMean", ["image"], ["columns"], axes=[2], keepdims=0),
        helper.make_node("Transpose", ["columns"], ["light"], perm=[2, 0, 1]),
        helper.make_node("Sub", ["one", "light"], ["dark"]),
        helper.make_node("Concat", ["light", "dark"], ["scores"], axis=2),
    ]
    graph = helper.make_graph(
        nodes,
        "columns",
        [helper.make_tensor_value_info("image", TensorProto.FLOAT, list(input_dims))],
        [helper.make_tensor_value_info("scores", TensorProto.FLOAT, None)],
        initializer=[one],
    )
    model = helper.make_model(graph, opset_imports=[helper.make_opsetid("", 13)])
    model.ir_version = 7
    return model.SerializeToString()


def test_runs_model_and_returns_sequence_scores():
    engine = OnnxEngine.from_bytes(column_model(SHAPE), SHAPE)
    tensor = np.ones(SHAPE, dtype=np.float32)
    tensor[..., :10] = 0.0
    scores = engine.run(tensor)
    assert scores.shape == (384, 1, 2)
    assert scores.dtype == np.float32
    np.testing.assert_allclose(scores[0, 0], [0.0, 1.0])
    np.testing.assert_allclose(scores[-1, 0], [1.0, 0.0])


def test_symbolic_dimensions_bind():
    engine = OnnxEngine.from_bytes(column_model(["batch", 1, 32, "width"]), SHAPE)
    assert engine.input_shape == SHAPE


def test_conflicting_input_shape_is_rejected():
    with pytest.raises(ModelLoadError, match="dimension 2"):
        OnnxEngine.from_bytes(column_model((1, 1, 16, 128)), SHAPE)


def test_wrong_input_rank_is_rejected():
    one = helper.make_tensor("one", TensorProto.FLOAT, [], [1.0])
    graph = helper.make_graph(
        [helper.make_node("Sub", ["one", "image"], ["out"])],
        "rank",
        [helper.make_tensor_value_info("image", TensorProto.FLOAT, [32, 384])],
        [helper.make_tensor_value_info("out", TensorProto.FLOAT, None)],
        initializer=[one],
    )
    model = helper.make_model(graph, opset_imports=[helper.make_opsetid("", 13)])
    model.ir_version = 7
    with pytest.raises(ModelLoadError, match="rank"):
        OnnxEngine.from_bytes(model.SerializeToString(), SHAPE)


def test_garbage_bytes_are_rejected():
    with pytest.raises(ModelLoadError):
        OnnxEngine.from_bytes(b"definitely not a model", SHAPE)


def test_wrong_tensor_shape_is_an_inference_error():
    engine = OnnxEngine.from_bytes(column_model(SHAPE), SHAPE)
    with pytest.raises(InferenceError):
        engine.run(np.zeros((1, 1, 16, 384), dtype=np.float32))


def test_unloaded_engine_refuses_to_run():
    engine = OnnxEngine(model_bytes=b"", expected_shape=SHAPE)
    with pytest.raises(InferenceError):
        engine.run(np.zeros(SHAPE, dtype=np.float32))


def test_end_to_end_recognition(text_crop):
    recognizer = TextRecognizer(column_model(SHAPE), json.dumps({"1": "x", "0": "-"}))
    assert recognizer.recognize(text_crop) == "x"
    assert recognizer.invoke_count == 1
    assert recognizer.average_inference_time() > 0.0


def test_model_wider_than_alphabet_fails_at_decode(text_crop):
    recognizer = TextRecognizer(column_model(SHAPE), json.dumps({"0": "-"}))
    with pytest.raises(IndexError):
        recognizer.recognize(text_crop)
