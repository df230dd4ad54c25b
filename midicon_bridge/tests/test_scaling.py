"""
Tests for value scaling.
"""

import pytest

from midicon_bridge.scaling import FADER_VALUES, scale


class TestScale:
    """Test raw MIDI -> console range mapping."""

    def test_table_covers_full_midi_range(self):
        assert len(FADER_VALUES) == 128

    def test_bounds(self):
        assert scale(0) == 0
        assert scale(127) == 100

    def test_saturates_from_125(self):
        assert scale(124) == 99
        assert scale(125) == scale(126) == scale(127) == 100

    def test_truncates_fractions(self):
        """raw * 0.8 is floored, never rounded up."""
        assert scale(1) == 0
        assert scale(2) == 1
        assert scale(64) == 51

    def test_monotonic(self):
        values = [scale(raw) for raw in range(128)]
        assert values == sorted(values)
        assert all(0 <= v <= 100 for v in values)

    @pytest.mark.parametrize("raw", [-1, 128, 300])
    def test_out_of_range_rejected(self, raw):
        with pytest.raises(ValueError):
            scale(raw)
