"""Package entry point for ``python -m rsvp_reader``.

WHY: Users run the reader as ``python -m rsvp_reader book.epub`` without
installing the console script.

HOW: Delegates straight to the CLI's main() function.
"""

from rsvp_reader.cli import main

if __name__ == "__main__":
    main()
