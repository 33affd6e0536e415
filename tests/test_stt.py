import pytest

from zyranet.stt import STTModel


def _seq(value, frames=2, width=3):
    return [[value] * width for _ in range(frames)]


def test_train_rejects_empty_data():
    with pytest.raises(ValueError, match="Invalid training data"):
        STTModel().train([], [])


def test_train_rejects_mismatched_lengths():
    with pytest.raises(ValueError, match="Invalid training data"):
        STTModel().train([_seq(0.0), _seq(1.0)], ["a"])


def test_predict_rejects_empty_features():
    model = STTModel()
    model.train([_seq(0.0)], ["a"])
    with pytest.raises(ValueError, match="Empty features"):
        model.predict([])


def test_predict_untrained_raises():
    with pytest.raises(RuntimeError):
        STTModel().predict(_seq(0.0))


def test_majority_of_nearest_three():
    model = STTModel()
    model.train(
        [_seq(0.0), _seq(0.1), _seq(5.0), _seq(5.1), _seq(0.2)],
        ["low", "low", "high", "high", "high"],
    )
    assert model.predict(_seq(0.0)) == "low"
    assert model.predict(_seq(5.0)) == "high"


def test_tie_goes_to_first_sorted_label():
    model = STTModel()
    model.train([_seq(0.0), _seq(1.0), _seq(2.0), _seq(9.0)], ["c", "b", "a", "z"])
    assert model.predict(_seq(0.0)) == "a"


def test_only_shared_frames_are_compared():
    model = STTModel()
    near = [[1.0, 1.0], [100.0, 100.0]]
    far = [[3.0, 3.0]]
    model.train([near, near, far], ["near", "near", "far"])
    assert model.predict([[1.0, 1.0]]) == "near"


def test_fewer_samples_than_neighbours():
    model = STTModel()
    model.train([_seq(0.0)], ["only"])
    assert model.predict(_seq(7.0)) == "only"


def test_training_frames_narrower_than_features_raise():
    model = STTModel()
    model.train([[[1.0]]], ["x"])
    with pytest.raises(ValueError):
        model.predict([[1.0, 2.0]])