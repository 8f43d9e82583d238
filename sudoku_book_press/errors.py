"""
Exceptions raised while building puzzle books.
"""


class InputShapeError(ValueError):
	"""A board string has the wrong length or an unknown symbol."""


class InsufficientDataError(LookupError):
	"""A source returned fewer records than a band requested."""


class SurfaceError(OSError):
	"""The draw surface failed to finalize the document."""
