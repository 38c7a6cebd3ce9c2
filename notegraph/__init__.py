"""
notegraph - a ranked note-transition graph for MIDI sequences.

Feed it note sequences (one per track, from as many songs as you like) and
it builds a cumulative model of which notes are played, how often, and what
comes before and after each one.  Query that model for rankings, recover
the phrases a note appeared in, or walk it to generate new lines.

- **Ranking.** ``graph.get_all_notes()`` lists notes by popularity;
  ``graph.get_note_paths(60)`` lists what leads into and out of a note.
- **Source recall.** ``graph.get_sequences_for_note(60, partial=True)``
  returns every phrase from the point the note was played.
- **Traversal.** ``graph.traverse(...)`` walks the graph, handing each
  choice to a selection policy: greedy, weighted-random, or your own.
- **MIDI files.** ``notegraph.midi_file`` reads and writes Standard MIDI
  Files through mido.

Minimal example:

    ```python
    import notegraph
    import notegraph.midi_file
    import notegraph.policies

    graph = notegraph.RankedSequenceGraph("demo")
    graph.add_song(notegraph.midi_file.load_song("tune.mid"))

    notes = graph.traverse(
        start_note = 60,
        max_count = 16,
        next = notegraph.policies.top_ranked_out,
        attributes = notegraph.TraverseAttributes.DISALLOW_REUSE | notegraph.TraverseAttributes.RESET_AFTER_EXHAUST
    )
    ```

Package-level exports: ``RankedSequenceGraph``, ``TraverseAttributes``,
``MidiEvent``, ``MidiSequence``.
"""

import notegraph.ranked_graph
import notegraph.sequence


RankedSequenceGraph = notegraph.ranked_graph.RankedSequenceGraph
TraverseAttributes = notegraph.ranked_graph.TraverseAttributes
MidiEvent = notegraph.sequence.MidiEvent
MidiSequence = notegraph.sequence.MidiSequence
