from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
import asyncio
import json

import httpx

from .errors import CalendarUnavailable
from ..utils.logger import logger


class CalendarSource(ABC):
    """Supplies the raw "<label>,<yyyy/MM/dd HH:mm:ss>" busy records."""

    @abstractmethod
    async def fetch(self) -> List[str]:
        ...


class StaticCalendarSource(CalendarSource):
    def __init__(self, records: Optional[Sequence[str]] = None):
        self.records = list(records or [])

    async def fetch(self) -> List[str]:
        return list(self.records)


class HttpCalendarSource(CalendarSource):
    """
    Reads the calendar snapshot from an HTTP endpoint.

    The body may be a JSON array of record strings, or plain text with one
    record per line. An empty body means nothing is booked.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        headers: Optional[dict] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.url = url
        self.timeout = timeout
        self.headers = headers or {}
        self.transport = transport

    async def fetch(self) -> List[str]:
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=5.0),
                transport=self.transport
            ) as client:
                response = await client.get(self.url, headers=self.headers)
                response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.error(f"Calendar request timeout: {e}")
            raise CalendarUnavailable(f"Calendar request to {self.url} timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"Calendar HTTP error: {e}")
            raise CalendarUnavailable(f"Calendar request failed: {e}") from e

        records = self.parse_body(response.text)
        logger.info(f"Retrieved {len(records)} calendar records from {self.url}")
        return records

    @staticmethod
    def parse_body(body: str) -> List[str]:
        text = (body or "").strip()
        if not text:
            return []

        if text.startswith("["):
            try:
                payload = json.loads(text)
            except json.JSONDecodeError as e:
                raise CalendarUnavailable(f"Calendar returned invalid JSON: {e}") from e
            if not isinstance(payload, list):
                raise CalendarUnavailable("Calendar JSON payload must be an array")
            return [str(item) for item in payload if str(item).strip()]

        return [line.strip() for line in text.splitlines() if line.strip()]


async def load_calendar(source: CalendarSource, timeout: float) -> List[str]:
    """
    Fetch the calendar snapshot, bounded by timeout seconds.

    Raises:
        CalendarUnavailable: If the source fails or does not answer in time
    """
    try:
        return await asyncio.wait_for(source.fetch(), timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.error(f"Calendar source did not answer within {timeout}s")
        raise CalendarUnavailable(f"Calendar source timed out after {timeout}s") from e
