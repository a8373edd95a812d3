"""Allow ``python -m tro`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m tro`` behaves identically to the ``tro`` console
script.
"""

from __future__ import annotations

from tro.cli.app import cli

if __name__ == "__main__":
    cli()
