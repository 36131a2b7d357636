"""
errors.py — Error Taxonomy
===========================
Two exception types cover every failure the engine raises:

    InvalidInput          – an algorithm / emitter was handed something that
                            is not a numeric sequence.  Programmer error.
    InvalidConfiguration  – bad size, speed preset, delay or algorithm name.
                            Raised before a run starts; never fatal.

A concurrent start and a cancelled run are NOT errors: they are reported
as RunOutcome values in the frame stream (see engine.controller).
"""


class VisualizerError(Exception):
    """Base class for every error raised by this project."""


class InvalidInput(VisualizerError, ValueError):
    """An algorithm was given a non-sequence or an out-of-range input."""


class InvalidConfiguration(VisualizerError, ValueError):
    """A configuration option was rejected before a run could start."""


__all__ = ["VisualizerError", "InvalidInput", "InvalidConfiguration"]
