"""
TaskLedger Backend — Request Context Tests
===========================================

What we test:
    ✅ Path parameter coercion (positive integers, ISO dates)
    ✅ JSON body decoding tolerates empty and invalid bodies
    ✅ Schema failures become ValidationError with per-field errors
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from taskledger.context import MAX_ID, RequestContext, date_param, int_param
from taskledger.exceptions import ValidationError
from taskledger.schemas.task import TaskCreate


def context_with_body(raw: bytes) -> RequestContext:
    request = MagicMock()
    request.body = AsyncMock(return_value=raw)
    return RequestContext(request=request, db=AsyncMock())


class TestIntParam:

    def test_positive_integer(self):
        assert int_param("42") == 42

    @pytest.mark.parametrize("value", ["0", "-1", "abc", "1.5", "4%202"])
    def test_rejects_non_positive_or_non_numeric(self, value):
        with pytest.raises(ValidationError) as exc_info:
            int_param(value, "categoryId")
        assert exc_info.value.field == "categoryId"

    def test_largest_integer_column_value(self):
        assert int_param(str(MAX_ID)) == MAX_ID

    @pytest.mark.parametrize("value", [str(MAX_ID + 1), str(2**70), "1" * 5000])
    def test_rejects_values_beyond_integer_column(self, value):
        with pytest.raises(ValidationError):
            int_param(value)

    @pytest.mark.parametrize("value", ["\u00b2", "\u0663", "\uff11"])
    def test_rejects_non_ascii_digits(self, value):
        """Superscript, Arabic-Indic and fullwidth digits all pass str.isdigit()."""
        assert value.isdigit()
        with pytest.raises(ValidationError):
            int_param(value)


class TestDateParam:

    def test_iso_date(self):
        assert date_param("2024-02-29", "start") == date(2024, 2, 29)

    def test_rejects_invalid_date(self):
        with pytest.raises(ValidationError) as exc_info:
            date_param("2023-02-29", "end")
        assert exc_info.value.field == "end"


class TestPayload:

    @pytest.mark.asyncio
    async def test_valid_body(self):
        ctx = context_with_body(b'{"title": "Write report", "priority": "high"}')
        payload = await ctx.payload(TaskCreate)

        assert payload.title == "Write report"
        assert payload.priority == "high"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", [b"", b"not json", b"[1, 2]"])
    async def test_unusable_body_decodes_to_empty_object(self, raw):
        assert await context_with_body(raw).json_body() == {}

    @pytest.mark.asyncio
    async def test_invalid_body_lists_field_errors(self):
        ctx = context_with_body(b'{"priority": "urgent"}')

        with pytest.raises(ValidationError) as exc_info:
            await ctx.payload(TaskCreate)

        fields = {err["field"] for err in exc_info.value.context["errors"]}
        assert {"title", "priority"} <= fields
        assert exc_info.value.message == "Invalid TaskCreate payload"
