"""Unit tests for root parsing and template transposition.

``transpose`` must leave the template untouched for ``C`` and shift every
degree by exactly the root's semitone offset otherwise. Unknown roots fall
back to the C template and report a warning instead of raising.
"""

import importlib
import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

pitch = importlib.import_module("midi_generator.pitch")


def test_template_is_c_major_from_36():
    """The template spans C2 to the octave with major-scale spacing."""
    assert pitch.TEMPLATE_SCALE == (36, 38, 40, 41, 43, 45, 47, 48)
    steps = [b - a for a, b in zip(pitch.TEMPLATE_SCALE, pitch.TEMPLATE_SCALE[1:])]
    assert steps == [2, 2, 1, 2, 2, 2, 1]


def test_root_tokens_cover_twelve_pitch_classes():
    assert len(pitch.ROOT_TOKENS) == 12
    assert [pitch.parse_root(t) for t in pitch.ROOT_TOKENS] == list(range(12))


@pytest.mark.parametrize(
    "token, expected",
    [
        ("C", 0),
        ("Cs", 1),
        ("C#", 1),
        ("Db", 1),
        ("ds", 3),
        ("Eb", 3),
        ("Fs", 6),
        ("Gb", 6),
        ("Ab", 8),
        ("As", 10),
        ("Bb", 10),
        ("B", 11),
    ],
)
def test_parse_root_spellings(token, expected):
    """Sharps written as ``s`` or ``#`` and flat enharmonics resolve alike."""
    assert pitch.parse_root(token) == expected


@pytest.mark.parametrize("token", ["H", "Es", "Cb", "C4", "", "sharp"])
def test_parse_root_unknown_returns_none(token):
    assert pitch.parse_root(token) is None


def test_transpose_c_is_identity():
    result = pitch.transpose(pitch.TEMPLATE_SCALE, "C")
    assert result.notes == list(pitch.TEMPLATE_SCALE)
    assert result.warnings == []


@pytest.mark.parametrize("root", list(pitch.PitchClass))
def test_transpose_is_additive(root):
    """Every degree rises by exactly the root's offset and length stays 8."""
    result = pitch.transpose(pitch.TEMPLATE_SCALE, root)
    assert len(result.notes) == 8
    assert [n - t for n, t in zip(result.notes, pitch.TEMPLATE_SCALE)] == [int(root)] * 8


def test_transpose_accepts_string_token():
    assert pitch.transpose(pitch.TEMPLATE_SCALE, "Fs").notes == [
        42, 44, 46, 47, 49, 51, 53, 54,
    ]


def test_transpose_unknown_root_falls_back_to_c(caplog):
    """A bad root yields the C template plus a warning, never an exception."""
    with caplog.at_level(logging.WARNING):
        result = pitch.transpose(pitch.TEMPLATE_SCALE, "H")
    assert result.notes == list(pitch.TEMPLATE_SCALE)
    assert result.warnings == ['"H" root not recognized, providing C scale']
    assert "root not recognized" in caplog.text


def test_transpose_unparseable_none():
    result = pitch.transpose(pitch.TEMPLATE_SCALE, None)
    assert result.notes == list(pitch.TEMPLATE_SCALE)
    assert len(result.warnings) == 1
