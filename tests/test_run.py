import json
import logging

import pytest

from pumplog.agent.run import EXIT_CONFIG, EXIT_DECODE, EXIT_INPUT, EXIT_OK, main

BAD_DATE = bytes([0x6E, 0xC1, 0x8E]) + bytes(49)  # month 13


@pytest.fixture(autouse=True)
def _restore_root_logger():
	root = logging.getLogger()
	saved, level = list(root.handlers), root.level
	yield
	for h in list(root.handlers):
		root.removeHandler(h)
	for h in saved:
		root.addHandler(h)
	root.setLevel(level)


def _write(tmp_path, data, name="page.bin"):
	p = tmp_path / name
	p.write_bytes(data)
	return str(p)


def test_text_output(tmp_path, capsys, sara_window):
	path = _write(tmp_path, sara_window(2014, 3, 15) + sara_window(2014, 12, 31))
	assert main([path]) == EXIT_OK
	assert capsys.readouterr().out.splitlines() == [
		"Sara6E 2014-03-16 00:00:00",
		"Sara6E 2015-01-01 00:00:00",
	]


def test_json_output(tmp_path, capsys, sara_window):
	path = _write(tmp_path, sara_window(2016, 2, 28))
	assert main([path, "--format", "json"]) == EXIT_OK
	out = json.loads(capsys.readouterr().out)
	assert out["_type"] == "Sara6E"
	assert out["valid_date"] == "2016-02-28"
	assert out["timestamp"] == "2016-02-29 00:00:00"


def test_hex_input(tmp_path, capsys, sara_window):
	p = tmp_path / "page.hex"
	p.write_text(sara_window(2014, 3, 15).hex() + "\n")
	assert main([str(p), "--hex"]) == EXIT_OK
	assert capsys.readouterr().out.strip() == "Sara6E 2014-03-16 00:00:00"


def test_malformed_date_stops_by_default(tmp_path, capsys, sara_window):
	path = _write(tmp_path, sara_window(2014, 3, 15) + BAD_DATE + sara_window(2014, 3, 15))
	assert main([path]) == EXIT_DECODE
	out = capsys.readouterr()
	assert out.out.splitlines() == ["Sara6E 2014-03-16 00:00:00"]
	assert "offset=53" in out.err


def test_malformed_date_skipped(tmp_path, capsys, sara_window):
	path = _write(tmp_path, BAD_DATE + sara_window(2014, 3, 15))
	assert main([path, "--on-error", "skip"]) == EXIT_OK
	out = capsys.readouterr()
	assert out.out.splitlines() == ["Sara6E 2014-03-16 00:00:00"]
	assert "[AGENT] [WARNING] SKIP type=0x6e offset=0" in out.err


def test_skip_policy_from_config(tmp_path, capsys, sara_window):
	(tmp_path / "config.yaml").write_text("decode:\n  on_error: skip\n  format: json\n")
	path = _write(tmp_path, BAD_DATE + sara_window(2014, 3, 15))
	assert main([path]) == EXIT_OK
	assert json.loads(capsys.readouterr().out)["valid_date"] == "2014-03-15"


def test_truncated_page_fails(tmp_path, capsys, sara_window):
	path = _write(tmp_path, sara_window(2014, 3, 15)[:40])
	assert main([path, "--on-error", "skip"]) == EXIT_DECODE
	assert capsys.readouterr().out == ""


def test_disabled_type_is_unknown(tmp_path, capsys, sara_window):
	cfg = tmp_path / "pumplog.yaml"
	cfg.write_text("decode:\n  disabled_types: ['0x6e']\n")
	path = _write(tmp_path, sara_window(2014, 3, 15))
	assert main([path, "--config", str(cfg)]) == EXIT_DECODE
	assert "no decoder for record type 0x6e" in capsys.readouterr().err


def test_missing_input(tmp_path):
	assert main([str(tmp_path / "nope.bin")]) == EXIT_INPUT


def test_windows_logged_at_debug(tmp_path, capsys, sara_window):
	path = _write(tmp_path, sara_window(2014, 3, 15) + sara_window(2014, 3, 15))
	assert main([path, "--log-level", "debug"]) == EXIT_OK
	err = capsys.readouterr().err
	assert "[READER] [DEBUG] window offset=0 type=0x6e len=52" in err
	assert "[READER] [DEBUG] window offset=52 type=0x6e len=52" in err


def test_missing_config_file(tmp_path, capsys, sara_window):
	path = _write(tmp_path, sara_window(2014, 3, 15))
	assert main([path, "--config", str(tmp_path / "nope.yaml")]) == EXIT_CONFIG
	out = capsys.readouterr()
	assert out.out == ""
	assert "[AGENT] [ERROR] CONFIG unreadable" in out.err


def test_config_yaml_syntax_error(tmp_path, capsys, sara_window):
	cfg = tmp_path / "broken.yaml"
	cfg.write_text("decode: [unclosed\n")
	path = _write(tmp_path, sara_window(2014, 3, 15))
	assert main([path, "--config", str(cfg)]) == EXIT_CONFIG
	assert "CONFIG unreadable" in capsys.readouterr().err


@pytest.mark.parametrize("decode", [
	"  on_error: ignore\n",
	"  format: xml\n",
	"  disabled_types: [junk]\n",
])
def test_invalid_decode_settings(tmp_path, capsys, sara_window, decode):
	cfg = tmp_path / "pumplog.yaml"
	cfg.write_text("decode:\n" + decode)
	path = _write(tmp_path, sara_window(2014, 3, 15))
	assert main([path, "--config", str(cfg)]) == EXIT_CONFIG
	out = capsys.readouterr()
	assert out.out == ""
	assert "[AGENT] [ERROR] CONFIG invalid" in out.err
