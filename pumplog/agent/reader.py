# pumplog/agent/reader.py
from __future__ import annotations
import logging
import string
from pathlib import Path
from typing import Iterator, Tuple

from pumplog.agent.dispatcher import Dispatch, lookup, record_size
from pumplog.common.errors import TruncatedWindowError, UnknownRecordError
from pumplog.recordspec.record import EventRecord

log = logging.getLogger("READER")


def read_page(path, *, hex_input: bool = False) -> bytes:
	"""
	Load a history page from disk. With hex_input the file holds hex text;
	whitespace is ignored, anything else that isn't hex raises ValueError.
	"""
	p = Path(path)
	if not hex_input:
		return p.read_bytes()
	text = p.read_text()
	digits = "".join(ch for ch in text if ch not in string.whitespace)
	return bytes.fromhex(digits)


def iter_windows(page: bytes, dispatch: Dispatch) -> Iterator[Tuple[int, int, bytes]]:
	"""Yield (offset, type_code, window) for each record, front to back."""
	offset = 0
	while offset < len(page):
		type_code = page[offset]
		try:
			size = record_size(dispatch, type_code)
		except UnknownRecordError as e:
			e.offset = offset
			raise
		end = offset + size
		if end > len(page):
			raise TruncatedWindowError(
				f"record 0x{type_code:02x} at offset {offset} needs {size} bytes, only {len(page) - offset} left",
				type_code=type_code,
				offset=offset,
			)
		yield offset, type_code, bytes(page[offset:end])
		offset = end


def decode_page(page: bytes, dispatch: Dispatch) -> Iterator[Tuple[int, EventRecord]]:
	"""Yield (offset, record) for each window; fields are decoded lazily by the record."""
	for offset, type_code, window in iter_windows(page, dispatch):
		log.debug("window offset=%d type=0x%02x len=%d", offset, type_code, len(window))
		yield offset, lookup(dispatch, type_code)(window)
