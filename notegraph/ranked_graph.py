"""A bidirectional, count-weighted graph of note transitions.

:class:`RankedSequenceGraph` ingests any number of note sequences and keeps,
for every distinct note value:

- the total number of times it was played,
- every note that immediately preceded it, with a transition count,
- every note that immediately followed it, with a transition count,
- a back-reference to every sequence containing it and the event index.

Nodes live in a single dict keyed by note value.  Edges refer to their
neighbours by note value rather than by object, so the structure holds no
reference cycles.

Ranked lists are sorted by descending count.  Equal counts keep insertion
order: first-ingested note first in :meth:`RankedSequenceGraph.get_all_notes`,
first-observed transition first in :meth:`RankedSequenceGraph.get_note_paths`.

Traversal delegates every choice to a caller-supplied selection policy (see
:mod:`notegraph.policies`), so the graph itself never decides which path to
take.
"""

import dataclasses
import enum
import logging
import typing

import notegraph.sequence
import notegraph.song


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class RankedNote:

	"""A note value paired with an occurrence or transition count."""

	note: int
	count: int


@dataclasses.dataclass(frozen=True)
class NotePaths:

	"""Ranked predecessors and successors of one note."""

	paths_in: typing.List[RankedNote]
	paths_out: typing.List[RankedNote]


@dataclasses.dataclass(frozen=True)
class TraverseStep:

	"""
	What a selection policy sees at each traversal step.

	Both path lists are already filtered against the traversal's exclusion set.
	"""

	note: int
	paths_in: typing.List[RankedNote]
	paths_out: typing.List[RankedNote]


SelectionPolicy = typing.Callable[[TraverseStep], typing.Optional[RankedNote]]


class TraverseAttributes (enum.Flag):

	"""
	Flags controlling :meth:`RankedSequenceGraph.traverse`.

	Attributes:
		DISALLOW_REUSE: Once visited, a note is excluded from the path lists
			handed to the policy for the rest of the traversal.
		RESET_AFTER_EXHAUST: When the policy finds nothing, clear the
			exclusion set and ask it once more before ending.
	"""

	NONE = 0
	DISALLOW_REUSE = enum.auto()
	RESET_AFTER_EXHAUST = enum.auto()


@dataclasses.dataclass
class _Node:

	note: int
	count: int = 0
	# neighbour note -> transition count
	paths_in: typing.Dict[int, int] = dataclasses.field(default_factory=dict)
	paths_out: typing.Dict[int, int] = dataclasses.field(default_factory=dict)
	# (source sequence, index into its unfiltered event list)
	sequences: typing.List[typing.Tuple[notegraph.sequence.MidiSequence, int]] = dataclasses.field(default_factory=list)


def _rank (counts: typing.Dict[int, int], exclude: typing.Collection[int] = ()) -> typing.List[RankedNote]:

	"""Build a descending ranked list, keeping dict order for equal counts."""

	ranked = [RankedNote(note=note, count=count) for note, count in counts.items() if note not in exclude]

	return sorted(ranked, key=lambda element: -element.count)


class RankedSequenceGraph:

	"""
	A cumulative note-transition model built from one or more sequences.
	"""

	def __init__ (self, name: str) -> None:

		"""
		Create an empty graph identified by ``name``.
		"""

		self._name = name
		self._nodes: typing.Dict[int, _Node] = {}
		self._insert_sequence: typing.List[int] = []

	@property
	def name (self) -> str:

		"""The graph's label, fixed at construction."""

		return self._name

	def __contains__ (self, note: object) -> bool:

		return note in self._nodes

	def __len__ (self) -> int:

		return len(self._nodes)

	def __repr__ (self) -> str:

		return f"RankedSequenceGraph(name={self._name!r}, notes={len(self._nodes)})"


	def add_sequence (self, sequence: notegraph.sequence.MidiSequence) -> None:

		"""
		Add every note-onset transition in ``sequence`` to the graph.

		Events other than note-ons are skipped.  Adding the same sequence
		twice doubles its counts; callers wanting idempotence must
		de-duplicate first.
		"""

		previous: typing.Optional[_Node] = None
		added = 0

		for event_index, event in sequence.note_on_events():

			note = typing.cast(int, event.note_number)

			node = self._nodes.get(note)

			if node is None:
				node = _Node(note=note)
				self._nodes[note] = node

			node.count += 1
			node.sequences.append((sequence, event_index))
			self._insert_sequence.append(note)

			if previous is not None:
				previous.paths_out[note] = previous.paths_out.get(note, 0) + 1
				node.paths_in[previous.note] = node.paths_in.get(previous.note, 0) + 1

			previous = node
			added += 1

		logger.debug(f"Graph {self._name!r}: added {added} notes ({len(self._nodes)} distinct)")


	def add_song (self, song: notegraph.song.MidiSong) -> None:

		"""
		Add each track of ``song`` as a separate sequence.

		Transitions are never recorded across track boundaries.
		"""

		for track in song.tracks:
			self.add_sequence(track.sequence)


	def get_all_notes (self) -> typing.List[RankedNote]:

		"""
		Return every known note in descending order of popularity.
		"""

		return _rank({note: node.count for note, node in self._nodes.items()})


	def get_insert_sequence (self) -> typing.List[int]:

		"""
		Return every ingested note value in the order it was processed.
		"""

		return list(self._insert_sequence)


	def get_note_paths (self, note: int, exclude: typing.Collection[int] = ()) -> NotePaths:

		"""
		Return the ranked paths into and out of ``note``.

		Any note in ``exclude`` is omitted from both lists.  An unknown note
		yields two empty lists.
		"""

		node = self._nodes.get(note)

		if node is None:
			return NotePaths(paths_in=[], paths_out=[])

		exclude = set(exclude)

		return NotePaths(
			paths_in = _rank(node.paths_in, exclude),
			paths_out = _rank(node.paths_out, exclude)
		)


	def get_sequences_for_note (self, note: int, partial: bool = False) -> typing.List[notegraph.sequence.MidiSequence]:

		"""
		Return one sequence per recorded occurrence of ``note``.

		Parameters:
			note: The note value to look up.
			partial: When False, return the source sequences as they were
				added (the same object may appear more than once).  When
				True, return each sequence truncated to begin at the
				matching event, with its duration reduced to match.
		"""

		node = self._nodes.get(note)

		if node is None:
			return []

		if not partial:
			return [sequence for sequence, _ in node.sequences]

		return [sequence.slice_from(event_index) for sequence, event_index in node.sequences]


	def traverse (
		self,
		start_note: int,
		max_count: int,
		next: SelectionPolicy,
		attributes: TraverseAttributes = TraverseAttributes.NONE
	) -> typing.List[int]:

		"""
		Walk the graph from ``start_note`` letting ``next`` choose each step.

		At every step the policy receives the current note and its ranked
		paths, filtered against the exclusion set, and returns the element
		to move to or None.  The walk ends when ``max_count`` notes have been
		visited or the policy has nothing to offer.  The visited notes are
		returned in order, starting with ``start_note``; an unknown start
		note returns an empty list.

		Exceptions raised by the policy propagate to the caller.
		"""

		disallow_reuse = bool(attributes & TraverseAttributes.DISALLOW_REUSE)
		reset_after_exhaust = bool(attributes & TraverseAttributes.RESET_AFTER_EXHAUST)

		exclude: typing.Set[int] = set()
		result: typing.List[int] = []
		current: typing.Optional[int] = start_note if start_note in self._nodes else None

		while current is not None and len(result) < max_count:

			if disallow_reuse:
				exclude.add(current)

			candidate = next(self._traverse_step(current, exclude))

			if candidate is None and reset_after_exhaust:
				# Retry once from a clean slate before giving up.
				exclude = set()
				candidate = next(self._traverse_step(current, exclude))

			result.append(current)
			current = candidate.note if candidate is not None else None

		logger.debug(f"Graph {self._name!r}: traversal from {start_note} visited {len(result)} notes")

		return result


	def _traverse_step (self, note: int, exclude: typing.Set[int]) -> TraverseStep:

		paths = self.get_note_paths(note, exclude)

		return TraverseStep(note=note, paths_in=paths.paths_in, paths_out=paths.paths_out)
