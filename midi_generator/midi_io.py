"""Utilities for encoding note lists as Standard MIDI Files.

A generated file holds exactly two chunks: a fixed 14-byte ``MThd`` header
(format 0, one track, 96 ticks per quarter note) followed by one ``MTrk``
track. Two track shapes are supported:

``scale``
    Each note is struck and released before the next one starts.

``chord``
    Every note is struck at once, the first note is released after the hold
    duration and the remaining notes are released with it.

Events are built as :mod:`mido` messages so their byte layout comes from the
library, then serialized here with an explicit status byte on every event.
``mido``'s own writer applies running status, which would drop the repeated
``0x90``/``0x80`` bytes of a chord track. The declared chunk length is always
taken from the serialized bytes rather than from a formula.

Example
-------
>>> import io
>>> from midi_generator.midi_io import write_header, write_chord_track
>>> buf = io.BytesIO()
>>> write_header(buf) + write_chord_track(buf, [36, 40, 43])
51
"""

from __future__ import annotations

import logging
import struct
from enum import Enum
from typing import BinaryIO, Iterable, Sequence

from mido import Message, MetaMessage, MidiFile, MidiTrack

__all__ = [
    "Shape",
    "TICKS_PER_BEAT",
    "NOTE_DURATION",
    "NOTE_ON_VELOCITY",
    "CHANNEL",
    "encode_variable_int",
    "build_scale_track",
    "build_chord_track",
    "build_track",
    "encode_track",
    "write_header",
    "write_scale_track",
    "write_chord_track",
    "write_track",
    "build_midi_file",
]

TICKS_PER_BEAT = 96
# Four quarter notes at 96 ticks each; encodes as ``83 00``.
NOTE_DURATION = 384
NOTE_ON_VELOCITY = 0x63
NOTE_OFF_VELOCITY = 0
CHANNEL = 0

HEADER_TAG = b"MThd"
TRACK_TAG = b"MTrk"
SMF_FORMAT = 0
TRACK_COUNT = 1


class Shape(Enum):
    """Whether the notes are played one after another or together."""

    SCALE = "scale"
    CHORD = "chord"


def encode_variable_int(value: int) -> bytes:
    """Encode ``value`` as a MIDI variable-length quantity.

    Seven bits are stored per byte, most significant group first, and every
    byte except the last has its top bit set.

    >>> encode_variable_int(0)
    b'\\x00'
    >>> encode_variable_int(384).hex()
    '8300'
    """

    if value < 0:
        raise ValueError(f"Variable-length quantity must be non-negative: {value}")
    groups = [value & 0x7F]
    value >>= 7
    while value:
        groups.append((value & 0x7F) | 0x80)
        value >>= 7
    return bytes(reversed(groups))


def _note_on(note: int, time: int = 0) -> Message:
    return Message(
        "note_on", channel=CHANNEL, note=note, velocity=NOTE_ON_VELOCITY, time=time
    )


def _note_off(note: int, time: int = 0) -> Message:
    return Message(
        "note_off", channel=CHANNEL, note=note, velocity=NOTE_OFF_VELOCITY, time=time
    )


def _require_notes(notes: Sequence[int]) -> None:
    if not notes:
        raise ValueError("notes must contain at least one note")


def build_scale_track(notes: Sequence[int]) -> MidiTrack:
    """Return a track playing ``notes`` one at a time in the given order."""

    _require_notes(notes)
    track = MidiTrack()
    for note in notes:
        track.append(_note_on(note))
        track.append(_note_off(note, NOTE_DURATION))
    track.append(MetaMessage("end_of_track", time=0))
    return track


def build_chord_track(notes: Sequence[int]) -> MidiTrack:
    """Return a track striking all ``notes`` together and releasing them together.

    Only the first release carries the hold duration; every other event sits
    at delta-time zero.
    """

    _require_notes(notes)
    track = MidiTrack()
    track.extend(_note_on(note) for note in notes)
    track.append(_note_off(notes[0], NOTE_DURATION))
    track.extend(_note_off(note) for note in notes[1:])
    track.append(MetaMessage("end_of_track", time=0))
    return track


def build_track(notes: Sequence[int], shape: Shape) -> MidiTrack:
    """Dispatch to :func:`build_scale_track` or :func:`build_chord_track`."""

    if shape is Shape.SCALE:
        return build_scale_track(notes)
    if shape is Shape.CHORD:
        return build_chord_track(notes)
    raise ValueError(f"Unknown track shape: {shape!r}")


def encode_track(messages: Iterable) -> bytes:
    """Serialize ``messages`` as a track event stream without running status."""

    data = bytearray()
    for msg in messages:
        data.extend(encode_variable_int(msg.time))
        data.extend(msg.bytes())
    return bytes(data)


def _write_chunk(sink: BinaryIO, tag: bytes, data: bytes) -> int:
    chunk = tag + struct.pack(">L", len(data)) + data
    sink.write(chunk)
    return len(chunk)


def write_header(sink: BinaryIO) -> int:
    """Write the fixed ``MThd`` chunk to ``sink`` and return its size (14)."""

    data = struct.pack(">HHH", SMF_FORMAT, TRACK_COUNT, TICKS_PER_BEAT)
    return _write_chunk(sink, HEADER_TAG, data)


def write_track(sink: BinaryIO, track: Iterable) -> int:
    """Write ``track`` as an ``MTrk`` chunk and return the bytes written.

    The length field equals the size of the serialized event stream.
    """

    events = encode_track(track)
    logging.debug("Writing track chunk with %d event bytes", len(events))
    return _write_chunk(sink, TRACK_TAG, events)


def write_scale_track(sink: BinaryIO, notes: Sequence[int]) -> int:
    """Write ``notes`` to ``sink`` as a sequential scale track."""

    return write_track(sink, build_scale_track(notes))


def write_chord_track(sink: BinaryIO, notes: Sequence[int]) -> int:
    """Write ``notes`` to ``sink`` as a simultaneous chord track."""

    return write_track(sink, build_chord_track(notes))


def build_midi_file(notes: Sequence[int], shape: Shape) -> MidiFile:
    """Return the in-memory :class:`mido.MidiFile` for ``notes``.

    The object mirrors what :func:`write_header` and :func:`write_track`
    produce and is handy for inspecting a request without touching disk.
    Saving it through ``mido`` yields an equivalent file that may use running
    status, so use the ``write_*`` helpers when byte-exact output matters.
    """

    mid = MidiFile(type=SMF_FORMAT, ticks_per_beat=TICKS_PER_BEAT)
    mid.tracks.append(build_track(notes, shape))
    return mid

