"""Exception types raised by the cave generation pipeline."""


class CaveGenerationError(Exception):
    """Base class for all cave generation failures."""


class CaveConfigurationError(CaveGenerationError, ValueError):
    """Generation parameters are malformed or produce no playable cave."""


class CaveInvariantError(CaveGenerationError, AssertionError):
    """An internal invariant was violated; indicates a logic defect."""


class GenerationInProgressError(CaveGenerationError, RuntimeError):
    """A new level was requested while another generation pass was running."""
