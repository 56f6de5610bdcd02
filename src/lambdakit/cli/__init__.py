"""lambdakit command-line interface (``lambdakit --help``)."""

from lambdakit.cli.app import app

__all__ = ["app"]
