"""Tests for request dispatch and file output.

``generate`` is exercised against in-memory sinks while ``generate_file`` uses
``tmp_path`` so filenames, directory creation and the environment override
can be verified.
"""

from __future__ import annotations

import io
import logging
import sys
from pathlib import Path

import pytest
from mido import MidiFile

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from midi_generator import generator  # noqa: E402  # isort:skip
from midi_generator.midi_io import Shape  # noqa: E402  # isort:skip


def _generate_bytes(shape, root, mapping) -> bytes:
    buf = io.BytesIO()
    generator.generate(shape, root, mapping, buf)
    return buf.getvalue()


@pytest.mark.parametrize(
    "token, shape",
    [("s", Shape.SCALE), ("Scale", Shape.SCALE), ("c", Shape.CHORD), ("chord", Shape.CHORD)],
)
def test_parse_shape(token, shape):
    assert generator.parse_shape(token) is shape


def test_parse_shape_unknown():
    with pytest.raises(ValueError, match="Unknown shape"):
        generator.parse_shape("arp")


def test_generate_scale_result():
    buf = io.BytesIO()
    result = generator.generate("scale", "D", "dorian", buf)
    assert result.shape is Shape.SCALE
    assert result.notes == [38, 40, 41, 43, 45, 47, 48, 50]
    assert result.warnings == []
    assert result.bytes_written == len(buf.getvalue()) == 14 + 8 + 9 * 8 + 4


def test_generate_chord_round_trip():
    data = _generate_bytes("c", "E", "m7")
    mid = MidiFile(file=io.BytesIO(data))
    ons = [msg.note for msg in mid.tracks[0] if msg.type == "note_on"]
    assert ons == [40, 43, 47, 50]


def test_bogus_mode_writes_major_scale():
    assert _generate_bytes("s", "G", "bogus") == _generate_bytes("s", "G", "major")


def test_bogus_quality_writes_major_triad():
    assert _generate_bytes("c", "G", "bogus") == _generate_bytes("c", "G", "maj")


def test_warnings_are_collected_from_each_step(caplog):
    with caplog.at_level(logging.WARNING):
        result = generator.generate("c", "H", "bogus", io.BytesIO())
    assert result.notes == [36, 40, 43]
    assert len(result.warnings) == 2
    assert "root not recognized" in result.warnings[0]
    assert "major triad" in result.warnings[1]


def test_missing_mapping_defaults_to_major():
    buf = io.BytesIO()
    result = generator.generate("s", "C", None, buf)
    assert result.notes == [36, 38, 40, 41, 43, 45, 47, 48]
    assert result.warnings == []


@pytest.mark.parametrize(
    "root, mapping, name",
    [
        ("Cs", "m7", "Csm7.mid"),
        ("C", "6/9", "C6_9.mid"),
        ("A", "minor_pentatonic", "Aminor_pentatonic.mid"),
    ],
)
def test_output_filename(root, mapping, name):
    assert generator.output_filename(root, mapping) == name


def test_generate_file_writes_named_file(tmp_path, caplog):
    out_dir = tmp_path / "nested" / "midi"
    with caplog.at_level(logging.INFO):
        result = generator.generate_file("c", "F", "maj7", out_dir)
    assert result.path == out_dir / "Fmaj7.mid"
    assert result.path.read_bytes()[:4] == b"MThd"
    assert result.path.stat().st_size == result.bytes_written
    assert "Wrote" in caplog.text


def test_generate_file_default_mapping_names(tmp_path):
    assert generator.generate_file("s", "C", output_dir=tmp_path).path.name == "Cmajor.mid"
    assert generator.generate_file("c", "C", output_dir=tmp_path).path.name == "Cmaj.mid"


def test_generate_file_uses_environment_directory(tmp_path, monkeypatch):
    monkeypatch.setenv(generator.OUTPUT_DIR_ENV, str(tmp_path))
    result = generator.generate_file("s", "Bb", "lydian")
    assert result.path == tmp_path / "Bblydian.mid"
    assert result.path.exists()


def test_generate_file_propagates_os_error(tmp_path, monkeypatch):
    def failing_open(*_args, **_kwargs):
        raise PermissionError("read-only filesystem")

    # Shadow ``open`` in the module namespace only.
    monkeypatch.setattr(generator, "open", failing_open, raising=False)
    with pytest.raises(OSError, match="read-only"):
        generator.generate_file("s", "C", "major", tmp_path)
