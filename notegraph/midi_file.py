"""Conversion between Standard MIDI Files (via mido) and note sequences.

mido stores message times as deltas in ticks.  Sequences use absolute
offsets, so each track is accumulated into running tick positions on the
way in and turned back into deltas on the way out.
"""

import logging
import os
import typing

import mido

import notegraph.sequence
import notegraph.song


logger = logging.getLogger(__name__)


def _message_to_event (message: mido.Message, offset: int) -> notegraph.sequence.MidiEvent:

	"""Convert one channel message to an event at an absolute offset."""

	subtype = message.type

	# A note_on with zero velocity is a note-off by MIDI convention.
	if subtype == notegraph.sequence.NOTE_ON and message.velocity == 0:
		subtype = notegraph.sequence.NOTE_OFF

	return notegraph.sequence.MidiEvent(
		offset = offset,
		subtype = subtype,
		note_number = getattr(message, "note", None),
		velocity = getattr(message, "velocity", None),
		channel = getattr(message, "channel", None)
	)


def track_to_sequence (track: typing.Iterable[mido.Message]) -> notegraph.sequence.MidiSequence:

	"""
	Convert a mido track into a sequence with absolute tick offsets.

	Meta messages only advance time.  The duration is the absolute tick of
	the track's last message, usually its end_of_track.
	"""

	events: typing.List[notegraph.sequence.MidiEvent] = []
	now = 0

	for message in track:

		now += message.time

		if message.is_meta:
			continue

		events.append(_message_to_event(message, now))

	return notegraph.sequence.MidiSequence(duration=now, events=events)


def load_song (path: typing.Union[str, os.PathLike]) -> notegraph.song.MidiSong:

	"""
	Read a MIDI file into a song with one track per file track.

	Tracks holding no channel messages (tempo maps, text-only tracks) are
	skipped.  Errors reading or parsing the file propagate.
	"""

	midi_file = mido.MidiFile(path)
	tracks: typing.List[notegraph.song.MidiTrack] = []

	for index, midi_track in enumerate(midi_file.tracks):

		sequence = track_to_sequence(midi_track)

		if not sequence.events:
			continue

		channels = [event.channel for event in sequence.events if event.channel is not None]

		tracks.append(notegraph.song.MidiTrack(
			name = midi_track.name or f"Track {index}",
			sequence = sequence,
			channel = channels[0] if channels else None
		))

	logger.info(f"Loaded {path}: {len(tracks)} of {len(midi_file.tracks)} tracks contain events")

	return notegraph.song.MidiSong(ticks_per_beat=midi_file.ticks_per_beat, tracks=tracks)


def notes_to_midi_file (
	notes: typing.Sequence[int],
	ticks_per_beat: int = 480,
	note_length: int = 240,
	velocity: int = 100,
	channel: int = 0,
	name: typing.Optional[str] = None
) -> mido.MidiFile:

	"""
	Render a list of note values as back-to-back notes in a one-track file.
	"""

	midi_file = mido.MidiFile(type=1, ticks_per_beat=ticks_per_beat)
	track = mido.MidiTrack()
	midi_file.tracks.append(track)

	if name:
		track.append(mido.MetaMessage("track_name", name=name, time=0))

	for note in notes:
		track.append(mido.Message("note_on", channel=channel, note=note, velocity=velocity, time=0))
		track.append(mido.Message("note_off", channel=channel, note=note, velocity=0, time=note_length))

	track.append(mido.MetaMessage("end_of_track", time=0))

	return midi_file
