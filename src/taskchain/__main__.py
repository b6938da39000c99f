"""Allow running taskchain as ``python -m taskchain``."""

from taskchain.cli import app

app(prog_name="tc")
