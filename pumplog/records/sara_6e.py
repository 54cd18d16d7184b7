# pumplog/records/sara_6e.py
from __future__ import annotations
from datetime import date, timedelta
from typing import Any, Dict

from pumplog.codec.packed_date import parse_date_2byte
from pumplog.common.errors import MalformedDateError
from pumplog.recordspec.record import DateCodec, Timestamp, base_json, timestamp_str

# Layout (offsets include the type byte):
#   0      type code 0x6E
#   1..2   packed date
#   3..51  reserved
_DATE_OFFSET = 1


class Sara6E:
	"""
	"Date validated" event. The pump marks its date as valid from the start
	of the following day, so timestamp() is midnight after the stored date.
	"""

	def __init__(self, data: bytes, *, date_codec: DateCodec = parse_date_2byte):
		self.data = bytes(data)
		self._date_codec = date_codec

	@classmethod
	def event_type_code(cls) -> int:
		return 0x6E

	@classmethod
	def bytesize(cls) -> int:
		return 52

	def valid_date(self) -> date:
		year, month, day = self._date_codec(self.data, _DATE_OFFSET)
		try:
			return date(year, month, day)
		except ValueError as e:
			raise MalformedDateError(
				f"invalid packed date {year:04d}-{month:02d}-{day:02d}: {e}",
				type_code=self.event_type_code(),
				offset=_DATE_OFFSET,
			) from e

	def valid_date_str(self) -> str:
		d = self.valid_date()
		return "%04d-%02d-%02d" % (d.year, d.month, d.day)

	def timestamp(self) -> Timestamp:
		midnight = self.valid_date() + timedelta(days=1)
		return (midnight.year, midnight.month, midnight.day, 0, 0, 0)

	def as_json(self) -> Dict[str, Any]:
		out = base_json(self)
		out["valid_date"] = self.valid_date_str()
		return out

	def to_s(self) -> str:
		return f"Sara6E {timestamp_str(self)}"

	def __repr__(self) -> str:
		return f"Sara6E(data=0x{self.data[:3].hex()}…)"
