# pumplog/agent/dispatcher.py
from typing import Callable, Dict, Any, Type
import logging

from pumplog.codec.packed_date import parse_date_2byte
from pumplog.common.config import get_decode_settings
from pumplog.common.errors import UnknownRecordError
from pumplog.recordspec.record import EventRecord
from pumplog.records.sara_6e import Sara6E

logger = logging.getLogger("DISPATCH")

# type_code -> factory(window_bytes) -> record
RecordFactory = Callable[[bytes], EventRecord]
Dispatch = Dict[int, RecordFactory]

# Record types shipped with this package
RECORD_TYPES = (
	Sara6E,
)


def _factory_for(cls: Type[Any]) -> RecordFactory:
	def _fn(window: bytes) -> EventRecord:
		return cls(window, date_codec=parse_date_2byte)
	_fn.record_type = cls
	_fn.__name__ = cls.__name__
	return _fn


def build_dispatch(cfg: dict) -> Dispatch:
	"""
	Build the static type-code table. Codes under decode.disabled_types are
	left out so the reader treats them as unknown.
	"""
	disabled = set(get_decode_settings(cfg)["disabled_types"])
	dispatch: Dispatch = {}

	for cls in RECORD_TYPES:
		code = cls.event_type_code()
		if code in dispatch:
			raise ValueError(f"duplicate record type code 0x{code:02x}: {dispatch[code].__name__} and {cls.__name__}")
		if code in disabled:
			logger.info("Skipping disabled record type: 0x%02x -> %s", code, cls.__name__)
			continue
		dispatch[code] = _factory_for(cls)
		logger.debug("Registered record type: 0x%02x -> %s (%d bytes)", code, cls.__name__, cls.bytesize())

	return dispatch


def lookup(dispatch: Dispatch, type_code: int) -> RecordFactory:
	factory = dispatch.get(type_code)
	if factory is None:
		raise UnknownRecordError(f"no decoder for record type 0x{type_code:02x}", type_code=type_code)
	return factory


def record_size(dispatch: Dispatch, type_code: int) -> int:
	return lookup(dispatch, type_code).record_type.bytesize()
