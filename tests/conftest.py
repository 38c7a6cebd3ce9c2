import typing

import pytest

import notegraph.ranked_graph
import notegraph.sequence


def make_sequence (notes: typing.Sequence[int], step: int = 10, with_note_offs: bool = False) -> notegraph.sequence.MidiSequence:

	"""Build a sequence of evenly spaced notes, optionally followed by note-offs."""

	events: typing.List[notegraph.sequence.MidiEvent] = []

	for i, note in enumerate(notes):
		events.append(notegraph.sequence.MidiEvent(offset=i * step, subtype="note_on", note_number=note, velocity=100))
		if with_note_offs:
			events.append(notegraph.sequence.MidiEvent(offset=i * step + step // 2, subtype="note_off", note_number=note, velocity=0))

	return notegraph.sequence.MidiSequence(duration=len(notes) * step, events=events)


@pytest.fixture
def graph () -> notegraph.ranked_graph.RankedSequenceGraph:

	"""An empty graph."""

	return notegraph.ranked_graph.RankedSequenceGraph("test")


@pytest.fixture
def two_cycle_graph () -> notegraph.ranked_graph.RankedSequenceGraph:

	"""A graph whose only transitions are 60 -> 62 and 62 -> 60."""

	graph = notegraph.ranked_graph.RankedSequenceGraph("two-cycle")
	graph.add_sequence(make_sequence([60, 62, 60]))

	return graph
