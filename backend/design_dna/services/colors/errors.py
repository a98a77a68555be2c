"""
Error types for the color pipeline.

Image decoding is strict: undecodable bytes fail the whole call. Parameter
checks happen before any pixel work.
"""


class ColorPipelineError(Exception):
    """Base class for color pipeline failures."""


class DecodeError(ColorPipelineError, ValueError):
    """Input bytes are not a supported or valid raster image."""


class InvalidParameter(ColorPipelineError, ValueError):
    """A caller-supplied parameter is out of range."""
