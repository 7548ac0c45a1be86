"""Layout, locking, errors, hints, logging, progress, output rendering and argument parsing for a Homebrew bottle installer."""

__version__ = "0.1.0"