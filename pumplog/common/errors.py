# pumplog/common/errors.py
from typing import Optional


class DecodeError(Exception):
	"""
	Base for every failure while turning history bytes into records.
	type_code / offset are filled in when known so callers can log them.
	"""

	def __init__(self, message: str, *, type_code: Optional[int] = None, offset: Optional[int] = None):
		super().__init__(message)
		self.type_code = type_code
		self.offset = offset


class MalformedDateError(DecodeError):
	"""Packed date bytes decode to a day that does not exist."""


class TruncatedWindowError(DecodeError):
	"""Fewer bytes left in the page than the record's bytesize()."""


class UnknownRecordError(DecodeError):
	"""No decoder registered for the type code."""
