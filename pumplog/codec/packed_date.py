# pumplog/codec/packed_date.py
from typing import Sequence, Tuple

# 2-byte packed date, shared by every history record type:
#   byte 0: MMMDDDDD  (high 3 bits of month, day)
#   byte 1: MYYYYYYY  (low bit of month, years since 2000)
_DAY_MASK = 0x1F
_MONTH_HI_MASK = 0xE0
_MONTH_LO_MASK = 0x80
_YEAR_MASK = 0x7F
YEAR_BASE = 2000


def parse_date_2byte(data: Sequence[int], offset: int) -> Tuple[int, int, int]:
	"""
	Decode the packed date at data[offset:offset + 2] into (year, month, day).
	No calendar validation here: month 0/13 or day 0 come back as-is.
	"""
	b0 = data[offset]
	b1 = data[offset + 1]
	day = b0 & _DAY_MASK
	month = ((b0 & _MONTH_HI_MASK) >> 4) | ((b1 & _MONTH_LO_MASK) >> 7)
	year = YEAR_BASE + (b1 & _YEAR_MASK)
	return year, month, day


def encode_date_2byte(year: int, month: int, day: int) -> bytes:
	"""Inverse of parse_date_2byte. Raises ValueError if a field overflows its bits."""
	if not YEAR_BASE <= year <= YEAR_BASE + _YEAR_MASK:
		raise ValueError(f"year {year} outside {YEAR_BASE}..{YEAR_BASE + _YEAR_MASK}")
	if not 0 <= month <= 0x0F:
		raise ValueError(f"month {month} does not fit in 4 bits")
	if not 0 <= day <= _DAY_MASK:
		raise ValueError(f"day {day} does not fit in 5 bits")
	b0 = ((month >> 1) << 5) | day
	b1 = ((month & 0x01) << 7) | (year - YEAR_BASE)
	return bytes((b0, b1))


def format_timestamp(ts: Sequence[int]) -> str:
	year, month, day, hour, minute, second = ts
	return "%04d-%02d-%02d %02d:%02d:%02d" % (year, month, day, hour, minute, second)
