"""Selection policies for :meth:`~notegraph.ranked_graph.RankedSequenceGraph.traverse`.

A policy is any callable taking a :class:`~notegraph.ranked_graph.TraverseStep`
and returning the :class:`~notegraph.ranked_graph.RankedNote` to move to, or
``None`` when it has nothing to offer.  The functions here cover the common
cases; anything else (user interaction, key constraints, rhythm-aware picks)
can be passed to ``traverse`` directly.
"""

import random
import typing

import notegraph.ranked_graph


DIRECTIONS = ("out", "in")


def _paths (step: notegraph.ranked_graph.TraverseStep, direction: str) -> typing.List[notegraph.ranked_graph.RankedNote]:

	if direction == "out":
		return step.paths_out

	return step.paths_in


def top_ranked_out (step: notegraph.ranked_graph.TraverseStep) -> typing.Optional[notegraph.ranked_graph.RankedNote]:

	"""
	Follow the most frequent successor.
	"""

	return step.paths_out[0] if step.paths_out else None


def top_ranked_in (step: notegraph.ranked_graph.TraverseStep) -> typing.Optional[notegraph.ranked_graph.RankedNote]:

	"""
	Follow the most frequent predecessor, walking the graph backwards.
	"""

	return step.paths_in[0] if step.paths_in else None


class WeightedChoice:

	"""
	Choose a neighbour with probability proportional to its transition count.

	Pass a seeded ``random.Random`` to make traversals repeatable.
	"""

	def __init__ (self, rng: typing.Optional[random.Random] = None, direction: str = "out") -> None:

		if direction not in DIRECTIONS:
			raise ValueError(f"Direction must be one of {DIRECTIONS}, got {direction!r}")

		self.rng = rng or random.Random()
		self.direction = direction

	def __call__ (self, step: notegraph.ranked_graph.TraverseStep) -> typing.Optional[notegraph.ranked_graph.RankedNote]:

		options = _paths(step, self.direction)

		if not options:
			return None

		total_weight = sum(element.count for element in options)
		roll = self.rng.uniform(0, total_weight)
		accum = 0.0

		for element in options:
			accum += element.count
			if roll <= accum:
				return element

		return options[-1]


def get_policy (name: str, rng: typing.Optional[random.Random] = None) -> notegraph.ranked_graph.SelectionPolicy:

	"""
	Return a stock policy by its configuration name.

	Known names are ``top``, ``top_in``, ``weighted`` and ``weighted_in``.
	"""

	if name == "top":
		return top_ranked_out

	if name == "top_in":
		return top_ranked_in

	if name == "weighted":
		return WeightedChoice(rng=rng, direction="out")

	if name == "weighted_in":
		return WeightedChoice(rng=rng, direction="in")

	raise ValueError(f"Unknown selection policy: {name!r}")
