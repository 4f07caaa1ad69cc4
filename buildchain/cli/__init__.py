"""buildchain command-line interface.

Exposes:
    cli -- Click command entry point (registered as ``buildchain`` script).
"""

from buildchain.cli.main import cli

__all__ = ["cli"]
