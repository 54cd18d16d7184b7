# pumplog/recordspec/record.py
from typing import Any, Callable, Dict, Protocol, Sequence, Tuple

from pumplog.codec.packed_date import format_timestamp

# (year, month, day, hour, minute, second)
Timestamp = Tuple[int, int, int, int, int, int]

# Injected packed-date primitive: (data, offset) -> (year, month, day)
DateCodec = Callable[[Sequence[int], int], Tuple[int, int, int]]


class EventRecord(Protocol):
	"""
	What every history record decoder provides. event_type_code() and
	bytesize() are constants and must be callable on the class, since the
	dispatcher sizes the window before constructing the record.
	"""
	data: bytes

	@classmethod
	def event_type_code(cls) -> int: ...

	@classmethod
	def bytesize(cls) -> int: ...

	def timestamp(self) -> Timestamp: ...

	def as_json(self) -> Dict[str, Any]: ...

	def to_s(self) -> str: ...


def timestamp_str(record: EventRecord) -> str:
	return format_timestamp(record.timestamp())


def base_json(record: EventRecord) -> Dict[str, Any]:
	"""Fields common to every record type, in output order."""
	return {
		"_type": type(record).__name__,
		"_description": record.to_s(),
		"timestamp": timestamp_str(record),
		"_raw": record.data.hex(),
	}
