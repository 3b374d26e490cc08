"""Shared fixtures for client_gesture_predict tests."""

import json

import httpx
import numpy as np
import pytest


def make_hand(seed: int = 0, as_dicts: bool = True):
    """Build a plausible 21-point hand skeleton."""
    rng = np.random.default_rng(seed)
    wrist = np.array([0.5, 0.8, 0.0])
    pts = wrist + rng.uniform(-0.2, 0.2, size=(21, 3))
    pts[0] = wrist
    if as_dicts:
        return [{"x": float(x), "y": float(y), "z": float(z)} for x, y, z in pts]
    return [[float(x), float(y), float(z)] for x, y, z in pts]


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.responses[min(len(self.requests), len(self.responses)) - 1]
        if isinstance(item, Exception):
            raise item
        if isinstance(item, httpx.Response):
            # Fresh copy per request, a Response is bound to one request
            return httpx.Response(item.status_code, headers=item.headers, content=item.content)
        return httpx.Response(200, json=item)

    def bodies(self):
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def hand():
    return make_hand()


@pytest.fixture
def clean_env(monkeypatch):
    for key in ("GESTURE_PREDICT_URL", "GESTURE_STRATEGIES", "GESTURE_TIMEOUT_S"):
        monkeypatch.delenv(key, raising=False)
