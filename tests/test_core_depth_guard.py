"""Tests for core.depth_guard: depth tracking and recursion-limit clamping."""

from __future__ import annotations

import logging
import sys

import pytest

from mfcompiler.core import DepthGuard, depth_clamp
from mfcompiler.diagnostics import DiagnosticCode, RecursionLimitError


class TestDepthGuard:
    """DepthGuard as a context manager."""

    def test_tracks_depth(self) -> None:
        """Depth increments inside and restores after."""
        guard = DepthGuard(max_depth=5)

        with guard:
            assert guard.depth == 1
            with guard:
                assert guard.depth == 2
        assert guard.depth == 0

    def test_raises_at_limit(self) -> None:
        """Entering beyond max_depth raises."""
        guard = DepthGuard(max_depth=2)

        with guard, guard, pytest.raises(RecursionLimitError) as exc_info, guard:
            pass

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.RECURSION_LIMIT_EXCEEDED

    def test_failed_enter_does_not_leak_depth(self) -> None:
        """A rejected entry leaves the depth unchanged."""
        guard = DepthGuard(max_depth=1)

        with guard:
            with pytest.raises(RecursionLimitError):
                guard.__enter__()
            assert guard.depth == 1
        assert guard.depth == 0

    def test_depth_restored_after_exception(self) -> None:
        """Exceptions inside the block still decrement."""
        guard = DepthGuard(max_depth=5)

        with pytest.raises(ValueError, match="inner"), guard:
            raise ValueError("inner")

        assert guard.depth == 0


class TestDepthClamp:
    """depth_clamp bounds requested depth by the interpreter limit."""

    def test_small_depth_unchanged(self) -> None:
        """Depths well under the limit pass through."""
        assert depth_clamp(10) == 10

    def test_large_depth_clamped(self, caplog: pytest.LogCaptureFixture) -> None:
        """Oversized depths are clamped with a warning."""
        limit = sys.getrecursionlimit()

        with caplog.at_level(logging.WARNING, logger="mfcompiler.core.depth_guard"):
            clamped = depth_clamp(limit * 10)

        assert clamped == (limit - 50) // 4
        assert "Clamping" in caplog.text

    def test_guard_uses_clamp(self) -> None:
        """DepthGuard clamps its own max_depth."""
        guard = DepthGuard(max_depth=sys.getrecursionlimit() * 10)

        assert guard.max_depth < sys.getrecursionlimit()
