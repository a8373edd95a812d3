"""Infrastructure layer — external system integration.

This layer wraps all interaction with the Trello REST API and the
configuration file.  Every raw third-party exception must be caught
here and re-raised as a :class:`~tro.exceptions.TroError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from tro.infra.config import TroConfig, default_config_path, load_config
from tro.infra.trello_client import HttpTrelloClient

__all__: list[str] = [
    "HttpTrelloClient",
    "TroConfig",
    "default_config_path",
    "load_config",
]
