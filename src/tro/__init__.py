"""tro — a Trello client for the command line.

Resolves fuzzy board, list, and card names into Trello entities and
manages them from a terminal, with a strict layered architecture.
"""

from tro.version import __version__

__all__: list[str] = ["__version__"]
