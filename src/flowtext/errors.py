"""Exceptions raised by the flowtext adapters.

The markup and editing core never raises for malformed input; these cover
configuration and list files read by the outer layers.
"""


class FlowTextError(ValueError):
    """Base class for flowtext errors."""


class ConfigError(FlowTextError):
    """A configuration file could not be parsed."""


class ListSourceError(FlowTextError):
    """A list file is missing, unreadable or malformed."""
