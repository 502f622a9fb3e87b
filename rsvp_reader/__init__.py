"""RSVP Reader — one-word-at-a-time speed reading with fixation anchors.

WHY: Rapid Serial Visual Presentation (RSVP) removes eye saccades from
silent reading by flashing each word at the same spot. Comfort at speed
comes down to how text is split into tokens and how long each token
stays on screen, with its anchor letter held still.

HOW: Document parsers turn files into raw text for the tokenizer. The
timing controller then presents the tokens one at a time; the fixation
calculator tells the display where to anchor each one. The core stages
are pure or single-owner state with no I/O.

RULES:
- The core (tokenizer, orp, delay, timing) never raises for bad input
- Ingestion errors are surfaced before a token sequence is loaded
- Rendering is always the caller's job; the core only emits callbacks
"""

__version__ = "0.1.0"
