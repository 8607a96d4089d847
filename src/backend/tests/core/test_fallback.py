"""
Tests for the explicit data-load fallback policy.
"""

import pytest

from core.exceptions import DataLoadFailure, NotEnrolled
from core.fallback import FallbackPolicy, load_with_fallback


async def _failing():
    raise DataLoadFailure("list elections failed")


@pytest.mark.unit
class TestLoadWithFallback:
    """Tests for load_with_fallback."""

    async def test_success_returns_loaded_value(self):
        async def loader():
            return ["e1"]

        for policy in FallbackPolicy:
            assert await load_with_fallback(loader, policy, list, operation="test") == ["e1"]

    async def test_propagate_policy_reraises(self):
        with pytest.raises(DataLoadFailure):
            await load_with_fallback(_failing, FallbackPolicy.PROPAGATE, list, operation="test")

    async def test_empty_policy_returns_default(self):
        result = await load_with_fallback(_failing, FallbackPolicy.EMPTY, list, operation="test")

        assert result == []

    async def test_default_is_a_fresh_value(self):
        first = await load_with_fallback(_failing, FallbackPolicy.EMPTY, list, operation="test")
        first.append("x")
        second = await load_with_fallback(_failing, FallbackPolicy.EMPTY, list, operation="test")

        assert second == []

    async def test_other_errors_always_propagate(self):
        async def loader():
            raise NotEnrolled("election-1")

        with pytest.raises(NotEnrolled):
            await load_with_fallback(loader, FallbackPolicy.EMPTY, list, operation="test")
