#!/usr/bin/env python3
"""
Gesture Prediction Client - Main Entry Point

Reads hand landmark frames from a JSON file (or stdin), sends each frame to
the gesture classifier and prints one line per frame: the predicted label
or "none".

Accepted input shapes:
    [[x, y, z], ...]                       one frame of 21 points
    [{"x": .., "y": .., "z": ..}, ...]     one frame of 21 points
    [frame, frame, ...]                    several frames
    {"landmarks": [...]}                   nested points or 63 flat values
    {"frames": [frame, ...]}               several frames

Usage:
    python -m client_gesture_predict.main frames.json
    cat frame.json | python -m client_gesture_predict.main - --strategy scaled --strategy absolute
"""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import replace
from numbers import Real
from typing import Any, List, Optional, TextIO

from .config import ClientConfig
from .events import PredictionStats
from .predictor import PredictionClient
from .strategies import STRATEGIES

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

NO_LABEL = "none"


def _looks_like_point(obj: Any) -> bool:
    if isinstance(obj, dict):
        return "x" in obj
    if isinstance(obj, (list, tuple)) and len(obj) == 3:
        return all(isinstance(c, Real) and not isinstance(c, bool) for c in obj)
    return False


def _frame(obj: Any) -> Any:
    """Unwrap a single frame, reshaping flat coordinate lists into points."""
    if isinstance(obj, dict) and "landmarks" in obj:
        obj = obj["landmarks"]
    if (
        isinstance(obj, list)
        and obj
        and len(obj) % 3 == 0
        and all(isinstance(c, Real) and not isinstance(c, bool) for c in obj)
    ):
        return [obj[i:i + 3] for i in range(0, len(obj), 3)]
    return obj


def load_frames(data: Any) -> List[Any]:
    """
    Split decoded JSON input into landmark frames.

    Frames are not validated here; malformed frames reach the client and
    come back as no label.
    """
    if isinstance(data, dict):
        if "frames" in data:
            return [_frame(f) for f in data["frames"]]
        return [_frame(data)]

    if isinstance(data, list):
        if not data or _looks_like_point(data[0]):
            return [data]
        if all(isinstance(c, Real) and not isinstance(c, bool) for c in data):
            return [_frame(data)]
        return [_frame(f) for f in data]

    return [data]


def read_input(source: str, stdin: TextIO = sys.stdin) -> Any:
    """Decode JSON from a path, or from stdin when source is '-'."""
    if source == "-":
        return json.load(stdin)
    with open(source, "r", encoding="utf-8") as f:
        return json.load(f)


async def main_async(args: argparse.Namespace, out: TextIO = sys.stdout) -> int:
    """Async main entry point."""
    stats = PredictionStats()
    try:
        config = ClientConfig.from_env()
        overrides = {}
        if args.url:
            overrides["url"] = args.url
        if args.strategy:
            overrides["strategies"] = tuple(args.strategy)
        if args.timeout is not None:
            overrides["timeout"] = args.timeout
        config = replace(config, **overrides)
        client = PredictionClient.from_config(config, observer=stats)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    try:
        frames = load_frames(read_input(args.input))
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read landmarks from {args.input}: {e}")
        return 1

    logger.info(f"Classifying {len(frames)} frame(s) via {config.url}")

    for frame in frames:
        label = await client.get_predicted_label(frame)
        print(label or NO_LABEL, file=out)

    if args.stats:
        logger.info(f"Prediction stats: {stats.get_stats()}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Hand Gesture Prediction Client",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "input",
        type=str,
        help="JSON file with landmark frames, '-' for stdin",
    )
    parser.add_argument(
        "--url",
        type=str,
        default=None,
        help="Classifier endpoint (overrides GESTURE_PREDICT_URL)",
    )
    parser.add_argument(
        "--strategy",
        action="append",
        choices=sorted(STRATEGIES),
        default=None,
        help="Normalization strategy, repeat to try several in order "
             "(overrides GESTURE_STRATEGIES)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request timeout in seconds (overrides GESTURE_TIMEOUT_S)",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Log outcome statistics when done",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    args = _build_parser().parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        code = asyncio.run(main_async(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        code = 0
    sys.exit(code)


if __name__ == "__main__":
    main()
