"""Build a note graph from MIDI files and optionally generate a new line.

Usage::

    python -m notegraph song.mid other.mid
    python -m notegraph song.mid --start 60 --count 32 --output walk.mid
    python -m notegraph song.mid --config graph.yaml

Settings are read from ``config.yaml`` (or ``--config``) when present:

.. code-block:: yaml

    graph:
      name: "my graph"
    traverse:
      start_note: 60
      max_count: 16
      attributes: [disallow_reuse, reset_after_exhaust]
      policy: weighted
      seed: 42
    output:
      ticks_per_beat: 480
      note_length: 240
      velocity: 100
      channel: 0
"""

import argparse
import logging
import os
import random
import sys
import typing

import yaml

import notegraph.midi_file
import notegraph.policies
import notegraph.ranked_graph


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def load_config (config_path: str = 'config.yaml') -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		return yaml.safe_load(f) or {}


def parse_attributes (names: typing.Iterable[str]) -> notegraph.ranked_graph.TraverseAttributes:

	"""
	Combine flag names such as ``disallow_reuse`` into traversal attributes.
	"""

	attributes = notegraph.ranked_graph.TraverseAttributes.NONE

	for name in names:
		try:
			attributes |= notegraph.ranked_graph.TraverseAttributes[name.upper()]
		except KeyError:
			raise ValueError(f"Unknown traverse attribute: {name!r}") from None

	return attributes


def main (argv: typing.Optional[typing.List[str]] = None) -> int:

	"""
	Main entry point for the notegraph command line.
	"""

	parser = argparse.ArgumentParser(prog="notegraph", description="Rank and traverse note transitions in MIDI files")
	parser.add_argument("files", nargs="+", help="MIDI files to add to the graph")
	parser.add_argument("--config", default="config.yaml", help="YAML config file (default: config.yaml)")
	parser.add_argument("--start", type=int, default=None, help="Note to start a traversal from")
	parser.add_argument("--count", type=int, default=None, help="Maximum number of notes to generate")
	parser.add_argument("--output", default=None, help="Write the traversal to this MIDI file")
	args = parser.parse_args(argv)

	config = load_config(args.config)

	graph_config = config.get('graph', {})
	traverse_config = config.get('traverse', {})
	output_config = config.get('output', {})

	graph = notegraph.ranked_graph.RankedSequenceGraph(graph_config.get('name', 'notegraph'))

	for path in args.files:
		try:
			song = notegraph.midi_file.load_song(path)
		except (OSError, EOFError, ValueError) as e:
			logger.error(f"Failed to read {path}: {e}")
			return 1

		graph.add_song(song)

	ranking = ", ".join(f"{element.note}x{element.count}" for element in graph.get_all_notes())
	logger.info(f"Graph {graph.name!r}: {len(graph)} distinct notes: {ranking}")

	start_note = args.start if args.start is not None else traverse_config.get('start_note')

	if start_note is None:
		return 0

	max_count = args.count if args.count is not None else traverse_config.get('max_count', 16)
	attributes = parse_attributes(traverse_config.get('attributes', []))
	rng = random.Random(traverse_config.get('seed'))
	policy = notegraph.policies.get_policy(traverse_config.get('policy', 'top'), rng=rng)

	notes = graph.traverse(start_note=start_note, max_count=max_count, next=policy, attributes=attributes)
	logger.info(f"Traversal from {start_note}: {notes}")

	if args.output:
		midi_file = notegraph.midi_file.notes_to_midi_file(
			notes,
			ticks_per_beat = output_config.get('ticks_per_beat', 480),
			note_length = output_config.get('note_length', 240),
			velocity = output_config.get('velocity', 100),
			channel = output_config.get('channel', 0),
			name = graph.name
		)
		midi_file.save(args.output)
		logger.info(f"Saved {args.output}")

	return 0


if __name__ == "__main__":
	sys.exit(main())
