"""Tests for ClientConfig."""

import pytest

from client_gesture_predict.config import DEFAULT_PREDICT_URL, ClientConfig


class TestClientConfig:
    def test_defaults(self):
        config = ClientConfig.from_env({})
        assert config.url == DEFAULT_PREDICT_URL
        assert config.strategies == ("scaled",)
        assert config.timeout is None

    def test_from_env(self):
        config = ClientConfig.from_env({
            "GESTURE_PREDICT_URL": "http://localhost:9000/predict",
            "GESTURE_STRATEGIES": "scaled, wrist_relative",
            "GESTURE_TIMEOUT_S": "2.5",
        })
        assert config.url == "http://localhost:9000/predict"
        assert config.strategies == ("scaled", "wrist_relative")
        assert config.timeout == 2.5

    def test_blank_strategies_fall_back(self):
        assert ClientConfig.from_env({"GESTURE_STRATEGIES": " "}).strategies == ("scaled",)

    def test_reads_process_env(self, monkeypatch):
        monkeypatch.setenv("GESTURE_PREDICT_URL", "http://example.test/predict")
        assert ClientConfig.from_env().url == "http://example.test/predict"

    def test_bad_timeout(self):
        with pytest.raises(ValueError, match="GESTURE_TIMEOUT_S"):
            ClientConfig.from_env({"GESTURE_TIMEOUT_S": "soon"})
        with pytest.raises(ValueError):
            ClientConfig(timeout=0)

    @pytest.mark.parametrize("raw", ["nan", "inf", "-1"])
    def test_non_finite_or_negative_timeout(self, raw):
        with pytest.raises(ValueError):
            ClientConfig.from_env({"GESTURE_TIMEOUT_S": raw})

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            ClientConfig.from_env({"GESTURE_STRATEGIES": "scaled,mirrored"})

    def test_empty_url(self):
        with pytest.raises(ValueError):
            ClientConfig(url="")
