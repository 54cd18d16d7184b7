import pytest

from pumplog.codec.packed_date import encode_date_2byte
from pumplog.records.sara_6e import Sara6E


def make_sara6e_window(year, month, day, filler=0x00):
	"""52-byte 0x6E window with the date packed at offset 1."""
	body = bytes([0x6E]) + encode_date_2byte(year, month, day)
	return body + bytes([filler]) * (Sara6E.bytesize() - len(body))


@pytest.fixture
def sara_window():
	return make_sara6e_window


@pytest.fixture(autouse=True)
def _no_user_config(monkeypatch, tmp_path):
	# keep a developer's config.yaml / $PUMPLOG_CONFIG out of the tests
	monkeypatch.delenv("PUMPLOG_CONFIG", raising=False)
	monkeypatch.chdir(tmp_path)
	monkeypatch.setattr("pumplog.common.config.ROOT", tmp_path)
