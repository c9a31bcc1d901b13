import pytz
from typing import Callable
from datetime import datetime

from ..utils.logger import logger


class TimezoneManager:
    @staticmethod
    def now_in(timezone: str) -> datetime:
        return datetime.now(pytz.timezone(timezone))

    @staticmethod
    def now_naive(timezone: str) -> datetime:
        """Current wall-clock time in the given zone, with the offset dropped."""
        return TimezoneManager.now_in(timezone).replace(tzinfo=None)

    @staticmethod
    def business_clock(timezone: str) -> Callable[[], datetime]:
        # Fail at startup rather than on the first message.
        pytz.timezone(timezone)
        logger.info(f"Business clock running in {timezone}")
        return lambda: TimezoneManager.now_naive(timezone)
