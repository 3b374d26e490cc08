"""
Prediction Client for the remote gesture classifier.

Handles:
- Landmark validation before any network traffic
- Normalization through an ordered list of strategies
- One HTTP POST per strategy attempt, JSON in and out
- Allow-list validation of the returned label

Every failure is converted to a None result; nothing propagates to the
caller.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable, Optional, Sequence, Union

import httpx

from .config import DEFAULT_PREDICT_URL, ClientConfig
from .events import Observer, PredictionEvent, notify
from .landmarks import Point3D, check_landmarks
from .message import (
    INVALID_SHAPE,
    NETWORK_FAILURE,
    NON_SUCCESS_STATUS,
    UNEXPECTED_ERROR,
    UNPARSABLE_RESPONSE,
    UNRECOGNIZED_LABEL,
    PredictionRequest,
    PredictionResponse,
)
from .strategies import NormalizationStrategy, resolve_strategies

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}

StrategySpec = Union[None, str, Iterable[Union[str, NormalizationStrategy]]]


class PredictionClient:
    """
    Async client that turns a hand skeleton into a directional label.

    Calls are independent: the client holds configuration only, so several
    predictions may be awaited concurrently.
    """

    def __init__(
        self,
        url: str = DEFAULT_PREDICT_URL,
        strategies: StrategySpec = None,
        observer: Optional[Observer] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize prediction client.

        Args:
            url: Classifier endpoint receiving the POST
            strategies: Normalization strategies tried in order; the first
                one answered with a known label wins
            observer: Callback receiving a PredictionEvent per attempt
            http_client: Shared httpx client (caller owns its lifetime)
            transport: Transport for the per-call client, ignored when
                http_client is given
            timeout: Request timeout in seconds, None keeps the transport
                default
        """
        self.url = url
        self.strategies = resolve_strategies(strategies)
        self.observer = observer
        self.timeout = timeout
        self._http_client = http_client
        self._transport = transport

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs) -> 'PredictionClient':
        """Create a client from a ClientConfig."""
        return cls(
            url=config.url,
            strategies=config.strategies,
            timeout=config.timeout,
            **kwargs,
        )

    async def get_predicted_label(self, landmarks) -> Optional[str]:
        """
        Classify a landmark set.

        Args:
            landmarks: 21 points exposing x/y/z (attributes, keys or
                3-element sequences)

        Returns:
            One of "up", "down", "left", "right", or None
        """
        try:
            return await self._predict(landmarks)
        except Exception as e:
            logger.error(f"Error calling prediction API: {e}")
            self._emit(None, UNEXPECTED_ERROR, detail=repr(e))
            return None

    async def _predict(self, landmarks) -> Optional[str]:
        valid, reason, points = check_landmarks(landmarks)
        if not valid:
            self._emit(None, INVALID_SHAPE, detail=reason)
            return None

        async with self._session() as client:
            for strategy in self.strategies:
                label = await self._attempt(client, strategy, points)
                if label is not None:
                    return label
        return None

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        strategy: NormalizationStrategy,
        points: Sequence[Point3D],
    ) -> Optional[str]:
        """Run one strategy through a single POST."""
        request = PredictionRequest.from_points(strategy.apply(points))
        try:
            body = request.to_json()
        except ValueError as e:
            logger.warning(f"Strategy {strategy.name} produced non-finite coordinates: {e}")
            self._emit(strategy.name, INVALID_SHAPE, detail=str(e))
            return None

        try:
            response = await client.post(
                self.url,
                content=body,
                headers=JSON_HEADERS,
            )
        except httpx.HTTPError as e:
            logger.error(f"Error calling prediction API: {e!r}")
            self._emit(strategy.name, NETWORK_FAILURE, detail=repr(e))
            return None

        if not response.is_success:
            logger.error(f"API error: {response.status_code} {response.reason_phrase}")
            self._emit(
                strategy.name,
                NON_SUCCESS_STATUS,
                status_code=response.status_code,
                detail=response.reason_phrase,
            )
            return None

        try:
            parsed = PredictionResponse.from_payload(response.json())
        except ValueError as e:
            logger.error(f"Unparsable prediction response: {e}")
            self._emit(
                strategy.name,
                UNPARSABLE_RESPONSE,
                status_code=response.status_code,
                detail=str(e),
            )
            return None

        logger.info(f"Predicted label from API: {parsed.prediction}")

        label = parsed.label
        if label is None:
            self._emit(
                strategy.name,
                UNRECOGNIZED_LABEL,
                status_code=response.status_code,
                detail=repr(parsed.prediction),
            )
            return None

        self._emit(strategy.name, "ok", label=label, status_code=response.status_code)
        return label

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the shared client, or a fresh one closed after the call."""
        if self._http_client is not None:
            yield self._http_client
            return

        kwargs = {}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self._transport is not None:
            kwargs["transport"] = self._transport
        async with httpx.AsyncClient(**kwargs) as client:
            yield client

    def _emit(self, strategy: Optional[str], outcome: str, **fields) -> None:
        event = PredictionEvent(strategy=strategy, outcome=outcome, **fields)
        logger.debug(f"Prediction attempt: {event}")
        notify(self.observer, event)


class SyncPredictionClient:
    """
    Synchronous wrapper around PredictionClient for use in non-async code.

    Each call runs its own event loop, so it must not be used from inside
    a running loop.
    """

    def __init__(
        self,
        url: str = DEFAULT_PREDICT_URL,
        strategies: StrategySpec = None,
        observer: Optional[Observer] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self._client = PredictionClient(
            url=url,
            strategies=strategies,
            observer=observer,
            transport=transport,
            timeout=timeout,
        )

    @property
    def url(self) -> str:
        return self._client.url

    def get_predicted_label(self, landmarks) -> Optional[str]:
        """Classify a landmark set, blocking until the answer arrives."""
        return asyncio.run(self._client.get_predicted_label(landmarks))


async def get_predicted_label(landmarks, **kwargs) -> Optional[str]:
    """
    Classify a landmark set with a one-off PredictionClient.

    Keyword arguments are passed to PredictionClient.
    """
    return await PredictionClient(**kwargs).get_predicted_label(landmarks)
