from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
import asyncio

from pydantic import BaseModel, Field
from langchain_core.prompts import ChatPromptTemplate
from langchain_google_genai import ChatGoogleGenerativeAI

from .errors import DateExtractionFailed, MalformedDesiredDate
from ..utils.time_utils import TimeFormat
from ..utils.logger import logger


DATE_EXTRACTION_PROMPT = """### Context
You are an artificial intelligence assistant. Your purpose is to determine the date and time the customer wants, in the format yyyy/MM/dd HH:mm:ss.

### Current Date and Time:
{current_day}

### Conversation Log:
{history}

Answer only with the date and time the customer wants, in the format yyyy/MM/dd HH:mm:ss."""


class DesiredDate(BaseModel):
    date: str = Field(description="Date and time the customer wants, formatted as yyyy/MM/dd HH:mm:ss")


class DateExtractor(ABC):
    """Turns a conversation transcript into the timestamp the customer wants."""

    @abstractmethod
    async def extract_raw(self, transcript: str, now: datetime) -> str:
        ...

    async def extract(self, transcript: str, now: datetime) -> datetime:
        raw = await self.extract_raw(transcript, now)
        try:
            return TimeFormat.parse(raw)
        except ValueError as e:
            logger.warning(f"Extractor returned an unparseable date: {raw!r}")
            raise MalformedDesiredDate(raw, str(e)) from e


class GeminiDateExtractor(DateExtractor):
    def __init__(self, api_key: Optional[str] = None, model: str = "gemini-2.5-flash", temperature: float = 0.0):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.prompt = ChatPromptTemplate.from_messages([("system", DATE_EXTRACTION_PROMPT)])
        self._chain = None

    def _get_chain(self):
        if self._chain is None:
            llm = ChatGoogleGenerativeAI(
                model=self.model,
                google_api_key=self.api_key,
                temperature=self.temperature
            )
            self._chain = self.prompt | llm.with_structured_output(DesiredDate)
            logger.info(f"Initialized date extractor with {self.model}")
        return self._chain

    async def extract_raw(self, transcript: str, now: datetime) -> str:
        try:
            result = await self._get_chain().ainvoke({
                "current_day": f"{now.strftime('%A')} {TimeFormat.format(now)}",
                "history": transcript
            })
        except Exception as e:
            logger.error(f"Date extraction call failed: {e}")
            raise DateExtractionFailed(f"Date extraction failed: {e}") from e

        if result is None:
            raise MalformedDesiredDate(None, "model returned no structured answer")

        logger.info(f"Extractor answered: {result.date}")
        return result.date


async def extract_desired_date(extractor: DateExtractor, transcript: str, now: datetime, timeout: float) -> datetime:
    """
    Ask the extractor for the desired timestamp, bounded by timeout seconds.

    Raises:
        DateExtractionFailed: If the extractor fails or does not answer in time
        MalformedDesiredDate: If the answer is not in the wire format
    """
    try:
        return await asyncio.wait_for(extractor.extract(transcript, now), timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.error(f"Date extractor did not answer within {timeout}s")
        raise DateExtractionFailed(f"Date extraction timed out after {timeout}s") from e
