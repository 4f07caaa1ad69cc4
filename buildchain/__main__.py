"""Entry point for `python -m buildchain`.

Usage:
    python -m buildchain ruby-20-centos7:latest -f buildconfigs.json
"""

from __future__ import annotations

from buildchain.cli import cli

cli()
