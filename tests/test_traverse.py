import typing

import pytest

import conftest
import notegraph.policies
import notegraph.ranked_graph


TraverseAttributes = notegraph.ranked_graph.TraverseAttributes


def test_unknown_start_note_returns_empty (two_cycle_graph: notegraph.ranked_graph.RankedSequenceGraph) -> None:

	"""Traversal from a note not in the graph should return nothing and never call the policy."""

	calls: typing.List[notegraph.ranked_graph.TraverseStep] = []

	def policy (step: notegraph.ranked_graph.TraverseStep) -> typing.Optional[notegraph.ranked_graph.RankedNote]:
		calls.append(step)
		return None

	assert two_cycle_graph.traverse(start_note=100, max_count=5, next=policy) == []
	assert calls == []


def test_plain_traversal_runs_to_max_count (two_cycle_graph: notegraph.ranked_graph.RankedSequenceGraph) -> None:

	"""Without attributes the walk can revisit notes until max_count is reached."""

	notes = two_cycle_graph.traverse(start_note=60, max_count=5, next=notegraph.policies.top_ranked_out)

	assert notes == [60, 62, 60, 62, 60]


def test_disallow_reuse_ends_early (two_cycle_graph: notegraph.ranked_graph.RankedSequenceGraph) -> None:

	"""With reuse disallowed a two-cycle is exhausted after visiting each note once."""

	notes = two_cycle_graph.traverse(
		start_note = 60,
		max_count = 5,
		next = notegraph.policies.top_ranked_out,
		attributes = TraverseAttributes.DISALLOW_REUSE
	)

	assert notes == [60, 62]


def test_reset_after_exhaust_continues_to_max_count (two_cycle_graph: notegraph.ranked_graph.RankedSequenceGraph) -> None:

	"""Resetting the exclusion set lets the walk keep cycling until max_count."""

	notes = two_cycle_graph.traverse(
		start_note = 60,
		max_count = 5,
		next = notegraph.policies.top_ranked_out,
		attributes = TraverseAttributes.DISALLOW_REUSE | TraverseAttributes.RESET_AFTER_EXHAUST
	)

	assert notes == [60, 62, 60, 62, 60]


def test_dead_end_emits_current_note (graph: notegraph.ranked_graph.RankedSequenceGraph) -> None:

	"""A note with no successors ends the walk after being emitted."""

	graph.add_sequence(conftest.make_sequence([60, 62, 64]))

	assert graph.traverse(start_note=60, max_count=10, next=notegraph.policies.top_ranked_out) == [60, 62, 64]


def test_max_count_zero (two_cycle_graph: notegraph.ranked_graph.RankedSequenceGraph) -> None:

	"""A non-positive max_count yields no notes."""

	assert two_cycle_graph.traverse(start_note=60, max_count=0, next=notegraph.policies.top_ranked_out) == []


def test_policy_sees_filtered_paths (graph: notegraph.ranked_graph.RankedSequenceGraph) -> None:

	"""Each step should hand the policy the current note and paths minus excluded notes."""

	graph.add_sequence(conftest.make_sequence([60, 62, 60, 64]))

	steps: typing.List[notegraph.ranked_graph.TraverseStep] = []

	def policy (step: notegraph.ranked_graph.TraverseStep) -> typing.Optional[notegraph.ranked_graph.RankedNote]:
		steps.append(step)
		return notegraph.policies.top_ranked_out(step)

	notes = graph.traverse(start_note=60, max_count=3, next=policy, attributes=TraverseAttributes.DISALLOW_REUSE)

	assert notes == [60, 62]
	assert steps[0].note == 60
	assert [element.note for element in steps[0].paths_out] == [62, 64]
	assert steps[0].paths_in == [notegraph.ranked_graph.RankedNote(note=62, count=1)]
	assert steps[1].note == 62
	assert steps[1].paths_out == []
	assert steps[1].paths_in == []


def test_reset_retries_once_per_step (graph: notegraph.ranked_graph.RankedSequenceGraph) -> None:

	"""After a reset the policy is asked exactly once more before the walk ends."""

	graph.add_sequence(conftest.make_sequence([60, 62]))

	calls: typing.List[int] = []

	def policy (step: notegraph.ranked_graph.TraverseStep) -> typing.Optional[notegraph.ranked_graph.RankedNote]:
		calls.append(step.note)
		return None

	notes = graph.traverse(
		start_note = 60,
		max_count = 5,
		next = policy,
		attributes = TraverseAttributes.DISALLOW_REUSE | TraverseAttributes.RESET_AFTER_EXHAUST
	)

	assert notes == [60]
	assert calls == [60, 60]


def test_reset_clears_exclusions_from_earlier_steps (graph: notegraph.ranked_graph.RankedSequenceGraph) -> None:

	"""The retry after a reset sees every path again, including already visited notes."""

	graph.add_sequence(conftest.make_sequence([60, 62, 64, 60]))

	seen: typing.List[typing.List[int]] = []

	def policy (step: notegraph.ranked_graph.TraverseStep) -> typing.Optional[notegraph.ranked_graph.RankedNote]:
		seen.append([element.note for element in step.paths_out])
		return notegraph.policies.top_ranked_out(step)

	notes = graph.traverse(
		start_note = 60,
		max_count = 4,
		next = policy,
		attributes = TraverseAttributes.DISALLOW_REUSE | TraverseAttributes.RESET_AFTER_EXHAUST
	)

	assert notes == [60, 62, 64, 60]
	# At 64 the only successor (60) is excluded, so the policy is retried unfiltered.
	assert seen[:4] == [[62], [64], [], [60]]


def test_policy_errors_propagate (two_cycle_graph: notegraph.ranked_graph.RankedSequenceGraph) -> None:

	"""Exceptions raised by the policy should reach the caller unchanged."""

	error = RuntimeError("policy failed")

	def policy (step: notegraph.ranked_graph.TraverseStep) -> typing.Optional[notegraph.ranked_graph.RankedNote]:
		raise error

	with pytest.raises(RuntimeError) as info:
		two_cycle_graph.traverse(start_note=60, max_count=5, next=policy)

	assert info.value is error


def test_traversal_does_not_mutate_graph (two_cycle_graph: notegraph.ranked_graph.RankedSequenceGraph) -> None:

	"""Traversal is read-only with respect to counts and the insert log."""

	before_notes = two_cycle_graph.get_all_notes()
	before_log = two_cycle_graph.get_insert_sequence()

	two_cycle_graph.traverse(
		start_note = 60,
		max_count = 10,
		next = notegraph.policies.top_ranked_out,
		attributes = TraverseAttributes.DISALLOW_REUSE | TraverseAttributes.RESET_AFTER_EXHAUST
	)

	assert two_cycle_graph.get_all_notes() == before_notes
	assert two_cycle_graph.get_insert_sequence() == before_log
