"""Build a graph from a couple of nursery-rhyme phrases and generate new lines.

Run with ``python examples/nursery_walk.py``; writes ``nursery_walk.mid``.
"""

import logging
import random

import notegraph
import notegraph.midi_file
import notegraph.policies

logging.basicConfig(level=logging.INFO)

STEP = 240

TWINKLE = [60, 60, 67, 67, 69, 69, 67, 65, 65, 64, 64, 62, 62, 60]
FRERE_JACQUES = [60, 62, 64, 60, 60, 62, 64, 60, 64, 65, 67, 64, 65, 67]


def phrase (notes):

	"""Turn a list of note values into a sequence of quarter-note events."""

	events = []

	for i, note in enumerate(notes):
		events.append(notegraph.MidiEvent(offset=i * STEP, subtype="note_on", note_number=note, velocity=100))
		events.append(notegraph.MidiEvent(offset=(i + 1) * STEP, subtype="note_off", note_number=note, velocity=0))

	return notegraph.MidiSequence(duration=len(notes) * STEP, events=events)


graph = notegraph.RankedSequenceGraph("nursery")
graph.add_sequence(phrase(TWINKLE))
graph.add_sequence(phrase(FRERE_JACQUES))

for element in graph.get_all_notes():
	paths = graph.get_note_paths(element.note)
	logging.info(f"{element.note}: {element.count} plays, leads to {[(p.note, p.count) for p in paths.paths_out]}")

# Every phrase from the first G onwards.
for sequence in graph.get_sequences_for_note(67, partial=True):
	logging.info(f"From 67: {[e.note_number for e in sequence.events if e.subtype == 'note_on']}")

greedy = graph.traverse(
	start_note = 60,
	max_count = 16,
	next = notegraph.policies.top_ranked_out,
	attributes = notegraph.TraverseAttributes.DISALLOW_REUSE | notegraph.TraverseAttributes.RESET_AFTER_EXHAUST
)
logging.info(f"Greedy: {greedy}")

wandering = graph.traverse(
	start_note = 60,
	max_count = 16,
	next = notegraph.policies.WeightedChoice(rng=random.Random(7))
)
logging.info(f"Weighted: {wandering}")

notegraph.midi_file.notes_to_midi_file(greedy + wandering, name="nursery walk").save("nursery_walk.mid")
