"""Tests for desired-date extraction without calling a real model."""

import asyncio
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from booking_agent.tools.date_extractor import (
    DesiredDate,
    GeminiDateExtractor,
    extract_desired_date,
)
from booking_agent.tools.errors import DateExtractionFailed, MalformedDesiredDate
from tests.conftest import ScriptedDateExtractor


NOW = datetime(2025, 3, 7, 10, 15)


class TestExtract:
    @pytest.mark.asyncio
    async def test_parses_wire_format(self):
        extractor = ScriptedDateExtractor(["2025/03/10 13:00:00"])
        assert await extractor.extract("Customer: Monday at 1pm", NOW) == datetime(2025, 3, 10, 13)

    @pytest.mark.asyncio
    async def test_malformed_answer(self):
        extractor = ScriptedDateExtractor(["next Monday at 1pm"])
        with pytest.raises(MalformedDesiredDate) as excinfo:
            await extractor.extract("Customer: Monday at 1pm", NOW)
        assert excinfo.value.raw == "next Monday at 1pm"

    @pytest.mark.asyncio
    async def test_missing_answer(self):
        extractor = ScriptedDateExtractor([None])
        with pytest.raises(MalformedDesiredDate):
            await extractor.extract("Customer: hi", NOW)


class TestExtractDesiredDate:
    @pytest.mark.asyncio
    async def test_passes_result_through(self):
        extractor = ScriptedDateExtractor(["2025/03/10 13:00:00"])
        result = await extract_desired_date(extractor, "Customer: Monday 1pm", NOW, timeout=1)
        assert result == datetime(2025, 3, 10, 13)
        assert extractor.transcripts == ["Customer: Monday 1pm"]

    @pytest.mark.asyncio
    async def test_times_out(self):
        class SlowExtractor(ScriptedDateExtractor):
            async def extract_raw(self, transcript, now):
                await asyncio.sleep(5)
                return "2025/03/10 13:00:00"

        with pytest.raises(DateExtractionFailed):
            await extract_desired_date(SlowExtractor([]), "Customer: hi", NOW, timeout=0.05)


class TestGeminiDateExtractor:
    @pytest.mark.asyncio
    async def test_renders_prompt_inputs(self):
        extractor = GeminiDateExtractor(api_key="test-key")
        chain = MagicMock()
        chain.ainvoke = AsyncMock(return_value=DesiredDate(date="2025/03/10 13:00:00"))
        extractor._chain = chain

        result = await extractor.extract("Customer: Monday at one", NOW)

        assert result == datetime(2025, 3, 10, 13)
        inputs = chain.ainvoke.call_args.args[0]
        assert inputs["current_day"] == "Friday 2025/03/07 10:15:00"
        assert inputs["history"] == "Customer: Monday at one"

    @pytest.mark.asyncio
    async def test_model_failure(self):
        extractor = GeminiDateExtractor(api_key="test-key")
        chain = MagicMock()
        chain.ainvoke = AsyncMock(side_effect=RuntimeError("quota exceeded"))
        extractor._chain = chain

        with pytest.raises(DateExtractionFailed):
            await extractor.extract("Customer: Monday at one", NOW)

    def test_prompt_variables(self):
        extractor = GeminiDateExtractor(api_key="test-key")
        assert set(extractor.prompt.input_variables) == {"current_day", "history"}
