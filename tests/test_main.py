"""Tests for the command line entry point."""

import asyncio
import io
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from client_gesture_predict.main import _build_parser, load_frames, main_async, read_input

from conftest import make_hand


class TestCLIParser:
    def test_defaults(self):
        args = _build_parser().parse_args(["frames.json"])
        assert args.input == "frames.json"
        assert args.url is None
        assert args.strategy is None
        assert args.timeout is None
        assert not args.stats
        assert not args.debug

    def test_repeated_strategy(self):
        args = _build_parser().parse_args(
            ["-", "--strategy", "scaled", "--strategy", "absolute", "--timeout", "1.5"]
        )
        assert args.strategy == ["scaled", "absolute"]
        assert args.timeout == 1.5

    def test_unknown_strategy(self):
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["-", "--strategy", "mirrored"])


class TestLoadFrames:
    def test_single_frame_of_dicts(self):
        hand = make_hand()
        assert load_frames(hand) == [hand]

    def test_single_frame_of_lists(self):
        hand = make_hand(as_dicts=False)
        assert load_frames(hand) == [hand]

    def test_list_of_frames(self):
        frames = [make_hand(1), make_hand(2)]
        assert load_frames(frames) == frames

    def test_landmarks_object_flat(self):
        flat = [float(i) for i in range(63)]
        frames = load_frames({"landmarks": flat})
        assert len(frames) == 1
        assert len(frames[0]) == 21
        assert frames[0][1] == [3.0, 4.0, 5.0]

    def test_bare_flat_list(self):
        frames = load_frames([float(i) for i in range(63)])
        assert len(frames[0]) == 21

    def test_frames_object(self):
        hand = make_hand()
        frames = load_frames({"frames": [{"landmarks": hand}, hand]})
        assert frames == [hand, hand]

    def test_empty_list(self):
        assert load_frames([]) == [[]]


class TestReadInput:
    def test_stdin(self):
        assert read_input("-", stdin=io.StringIO('{"landmarks": []}')) == {"landmarks": []}

    def test_file(self, tmp_path):
        path = tmp_path / "frame.json"
        path.write_text(json.dumps([1, 2, 3]))
        assert read_input(str(path)) == [1, 2, 3]


class TestMainAsync:
    def _args(self, *argv):
        return _build_parser().parse_args(list(argv))

    def test_prints_one_line_per_frame(self, tmp_path, clean_env):
        path = tmp_path / "frames.json"
        path.write_text(json.dumps([make_hand(1), make_hand(2)[:4]]))

        fake = MagicMock()
        fake.get_predicted_label = AsyncMock(side_effect=["left", None])
        out = io.StringIO()

        with patch("client_gesture_predict.main.PredictionClient") as client_cls:
            client_cls.from_config.return_value = fake
            code = asyncio.run(main_async(
                self._args(str(path), "--url", "http://classifier.test/predict", "--stats"),
                out=out,
            ))

        assert code == 0
        assert out.getvalue().splitlines() == ["left", "none"]
        config = client_cls.from_config.call_args[0][0]
        assert config.url == "http://classifier.test/predict"
        assert fake.get_predicted_label.await_count == 2

    def test_missing_file(self, tmp_path, clean_env):
        code = asyncio.run(main_async(self._args(str(tmp_path / "nope.json")), out=io.StringIO()))
        assert code == 1

    def test_bad_json(self, tmp_path, clean_env):
        path = tmp_path / "frames.json"
        path.write_text("{not json")
        assert asyncio.run(main_async(self._args(str(path)), out=io.StringIO())) == 1

    def test_bad_config(self, tmp_path, clean_env, monkeypatch):
        monkeypatch.setenv("GESTURE_TIMEOUT_S", "later")
        path = tmp_path / "frames.json"
        path.write_text("[]")
        assert asyncio.run(main_async(self._args(str(path)), out=io.StringIO())) == 2
