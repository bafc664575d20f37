# tests/utils/test_helpers.py
"""Tests for postdeck/utils/helpers.py."""

from datetime import UTC

import pytest

from postdeck.utils import strip_bearer, utcnow


class TestStripBearer:
    @pytest.mark.parametrize(
        ("credential", "expected"),
        [
            (None, ""),
            ("", ""),
            ("Bearer", ""),
            ("Bearer abc.def", "abc.def"),
            ("bearer abc", "abc"),
            ("  Bearer   abc  ", "abc"),
            ("abc.def", "abc.def"),
        ],
    )
    def test_strip(self, credential: str | None, expected: str) -> None:
        assert strip_bearer(credential) == expected


def test_utcnow_is_aware() -> None:
    assert utcnow().tzinfo is UTC
