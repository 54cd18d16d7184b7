#!/usr/bin/env python3
# pumplog/agent/run.py
import argparse
import json
import logging
import sys

import yaml

from pumplog.agent.dispatcher import build_dispatch
from pumplog.agent.reader import decode_page, read_page
from pumplog.common.config import FORMAT_CHOICES, ON_ERROR_CHOICES, get_decode_settings, load_config
from pumplog.common.errors import DecodeError, MalformedDateError
from pumplog.common.logging_config import setup_logging

EXIT_OK = 0
EXIT_DECODE = 1
EXIT_INPUT = 2
EXIT_CONFIG = 3


def _render(record, fmt: str) -> str:
	if fmt == "json":
		return json.dumps(record.as_json(), separators=(",", ":"))
	return record.to_s()


def _parse_args(argv=None):
	ap = argparse.ArgumentParser(prog="pumplog-decode", description="Decode a pump history page into one line per record.")
	ap.add_argument("path", help="history page file (raw bytes, or hex text with --hex)")
	ap.add_argument("--hex", action="store_true", help="input file holds hex text")
	ap.add_argument("--format", choices=FORMAT_CHOICES, default=None, help="output format (default from config, else text)")
	ap.add_argument("--on-error", choices=ON_ERROR_CHOICES, default=None, help="stop or skip a record whose fields fail to decode")
	ap.add_argument("--config", default=None, help="YAML config file (default: $PUMPLOG_CONFIG or ./config.yaml)")
	ap.add_argument("--log-level", default=None, help="override logging.level from config")
	return ap.parse_args(argv)


def main(argv=None) -> int:
	args = _parse_args(argv)

	try:
		cfg = load_config(args.config)
	except (OSError, yaml.YAMLError) as e:
		setup_logging({}, args.log_level)
		logging.getLogger("AGENT").exception("CONFIG unreadable: %r", e)
		return EXIT_CONFIG

	# Init logging early using YAML settings
	setup_logging(cfg, args.log_level)
	log = logging.getLogger("AGENT")

	try:
		settings = get_decode_settings(cfg)
		dispatch = build_dispatch(cfg)
	except ValueError as e:
		log.exception("CONFIG invalid: %s", e)
		return EXIT_CONFIG

	fmt = args.format or settings["format"]
	on_error = args.on_error or settings["on_error"]
	log.info("DISPATCH types=%s", ["0x%02x" % c for c in sorted(dispatch)])

	try:
		page = read_page(args.path, hex_input=args.hex)
	except (OSError, ValueError) as e:
		log.error("cannot read %s: %s", args.path, e)
		return EXIT_INPUT

	decoded = skipped = 0
	try:
		for offset, record in decode_page(page, dispatch):
			try:
				line = _render(record, fmt)
			except MalformedDateError as e:
				e.offset = offset + (e.offset or 0)
				if on_error == "skip":
					log.warning("SKIP type=0x%02x offset=%d: %s", record.event_type_code(), offset, e)
					skipped += 1
					continue
				raise
			print(line)
			decoded += 1
	except DecodeError as e:
		log.error("DECODE failed at offset=%s: %s", e.offset, e)
		return EXIT_DECODE

	log.info("DONE records=%d skipped=%d bytes=%d", decoded, skipped, len(page))
	return EXIT_OK


if __name__ == "__main__":
	sys.exit(main())
