import copy
import dataclasses
import typing

import notegraph.sequence


@dataclasses.dataclass
class MidiTrack:

	"""
	A named sequence, usually one track of a MIDI file.
	"""

	name: str
	sequence: notegraph.sequence.MidiSequence
	channel: typing.Optional[int] = None


@dataclasses.dataclass
class MidiSong:

	"""
	A collection of tracks sharing one timing resolution.
	"""

	ticks_per_beat: int
	tracks: typing.List[MidiTrack] = dataclasses.field(default_factory=list)

	@property
	def duration (self) -> float:

		"""Return the duration of the longest track (0 for an empty song)."""

		return max((track.sequence.duration for track in self.tracks), default=0)

	def clone (self) -> "MidiSong":

		"""Return a deep copy of this song."""

		return copy.deepcopy(self)
