"""
Tests for coordinate translation (matrix keys, playback keys, encoders).
"""

import pytest

from midicon_bridge.coordinates import (
    matrix_cell, matrix_key, playback_key, encoder_delta,
    playback_encoder_index, view_encoder_number, view_encoder_position,
)


class TestMatrixKey:
    """Test matrix note -> console key."""

    @pytest.mark.parametrize("note, expected", [
        (1, 416),
        (8, 423),
        (9, 316),
        (16, 323),
        (17, 216),
        (25, 116),
        (32, 123),
    ])
    def test_known_keys(self, note, expected):
        assert matrix_key(note) == expected

    def test_cells(self):
        assert matrix_cell(1) == (1, 1)
        assert matrix_cell(8) == (1, 8)
        assert matrix_cell(9) == (2, 1)
        assert matrix_cell(32) == (4, 8)

    def test_all_keys_follow_formula(self):
        for note in range(1, 33):
            row = (note + 7) // 8
            col = note % 8 or 8
            assert matrix_key(note) == 515 - row * 100 + col

    def test_keys_unique(self):
        keys = [matrix_key(note) for note in range(1, 33)]
        assert len(set(keys)) == 32

    @pytest.mark.parametrize("note", [0, 33])
    def test_outside_matrix_rejected(self, note):
        with pytest.raises(ValueError):
            matrix_key(note)


class TestPlaybackKey:
    """Test playback sub-bank offsets."""

    @pytest.mark.parametrize("note, expected", [
        (33, 191), (40, 198),
        (41, 201), (48, 208),
        (49, 101), (56, 108),
        (68, 301), (75, 308),
    ])
    def test_bank_edges(self, note, expected):
        assert playback_key(note) == expected

    @pytest.mark.parametrize("note", [32, 57, 67, 76])
    def test_outside_banks_rejected(self, note):
        with pytest.raises(ValueError):
            playback_key(note)


class TestEncoders:
    """Test encoder note pairs."""

    def test_delta_direction(self):
        assert encoder_delta(86) == 1
        assert encoder_delta(87) == -1
        assert encoder_delta(78) == 1
        assert encoder_delta(85) == -1

    def test_playback_encoder_pairs(self):
        assert playback_encoder_index(86) == 0
        assert playback_encoder_index(87) == 0
        assert playback_encoder_index(88) == 1
        assert playback_encoder_index(100) == 7
        assert playback_encoder_index(101) == 7

    def test_view_encoder_numbers(self):
        assert [view_encoder_number(n) for n in range(78, 86)] == [1, 1, 2, 2, 3, 3, 4, 4]

    def test_view_encoder_positions(self):
        assert view_encoder_position(78) == (204, 995)
        assert view_encoder_position(81) == (577, 995)
        assert view_encoder_position(82) == (946, 995)
        assert view_encoder_position(85) == (1315, 995)

    @pytest.mark.parametrize("note", [85, 102])
    def test_playback_encoder_range(self, note):
        with pytest.raises(ValueError):
            playback_encoder_index(note)

    def test_view_encoder_range(self):
        with pytest.raises(ValueError):
            view_encoder_number(86)
