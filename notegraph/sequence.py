"""Note event and sequence shapes consumed by the ranked graph.

Events carry an absolute ``offset`` (ticks, beats or any monotonic unit)
and a ``subtype`` named after the corresponding mido message type, so
``"note_on"``, ``"note_off"``, ``"control_change"`` and so on.  Only
note-onset events take part in the graph; everything else travels along
untouched so partial sequences keep their note-offs and controllers.
"""

import dataclasses
import typing


NOTE_ON = "note_on"
NOTE_OFF = "note_off"


@dataclasses.dataclass
class MidiEvent:

	"""
	A single timed event within a sequence.
	"""

	offset: float
	subtype: str
	note_number: typing.Optional[int] = None
	velocity: typing.Optional[int] = None
	channel: typing.Optional[int] = None


def is_note_on (event: MidiEvent) -> bool:

	"""Return True for note-onset events that name a note."""

	return event.subtype == NOTE_ON and event.note_number is not None


@dataclasses.dataclass
class MidiSequence:

	"""
	An ordered list of events and the total time they span.
	"""

	duration: float
	events: typing.List[MidiEvent] = dataclasses.field(default_factory=list)

	def note_on_events (self) -> typing.List[typing.Tuple[int, MidiEvent]]:

		"""
		Return ``(index, event)`` pairs for every note-onset event.

		The index is the position within the full, unfiltered event list.
		"""

		return [(index, event) for index, event in enumerate(self.events) if is_note_on(event)]

	def slice_from (self, index: int) -> "MidiSequence":

		"""
		Return a new sequence starting at ``events[index]``.

		The duration shrinks by the time between the first event and the
		event at ``index``.  This sequence is left unchanged.
		"""

		elapsed = self.events[index].offset - self.events[0].offset

		return MidiSequence(
			duration = self.duration - elapsed,
			events = self.events[index:]
		)
