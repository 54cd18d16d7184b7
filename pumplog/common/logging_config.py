# pumplog/common/logging_config.py
from __future__ import annotations
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


class TagFormatter(logging.Formatter):
	"""2025-08-29T23:20:25.886Z [TAG] [LEVEL] message, always UTC."""

	def formatTime(self, record, datefmt=None):
		dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
		return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{int(dt.microsecond / 1000):03d}Z"

	def format(self, record):
		tag = record.name.split(".")[-1].upper()
		line = f"{self.formatTime(record)} [{tag}] [{record.levelname}] {record.getMessage()}"
		if record.exc_info:
			line += "\n" + self.formatException(record.exc_info)
		return line


def _resolve_log_path(log_cfg: Dict[str, Any]) -> Optional[Path]:
	"""
	Combine logging.dir + logging.file into a full path.
	If 'file' is absolute, it wins. No 'file' means no file logging.
	"""
	file_name = str(log_cfg.get("file") or "").strip()
	if not file_name:
		return None

	p = Path(file_name)
	if p.is_absolute():
		return p

	dir_val = str(log_cfg.get("dir", "")).strip()
	if dir_val:
		return Path(dir_val).expanduser().resolve() / file_name
	return Path.cwd() / file_name


def setup_logging(cfg: Dict[str, Any], level_override: Optional[str] = None) -> logging.Logger:
	log_cfg = (cfg or {}).get("logging", {}) or {}

	level_name = str(level_override or log_cfg.get("level", "INFO")).upper()
	level = getattr(logging, level_name, logging.INFO)

	# wipe preexisting handlers so repeated calls don't duplicate lines
	root = logging.getLogger()
	root.setLevel(level)
	for h in list(root.handlers):
		root.removeHandler(h)

	fmt = TagFormatter()

	if bool(log_cfg.get("console", True)):
		ch = logging.StreamHandler()
		ch.setLevel(level)
		ch.setFormatter(fmt)
		root.addHandler(ch)

	log_path = _resolve_log_path(log_cfg)
	if log_path:
		try:
			log_path.parent.mkdir(parents=True, exist_ok=True)
			fh = logging.handlers.RotatingFileHandler(
				filename=str(log_path),
				maxBytes=int(log_cfg.get("rotate_max_bytes", 1_048_576)),
				backupCount=int(log_cfg.get("rotate_backups", 5)),
			)
			fh.setLevel(level)
			fh.setFormatter(fmt)
			root.addHandler(fh)
		except OSError as e:
			# keep console logging so the failure is visible
			logging.getLogger("LOGGING").warning("file handler setup failed: %r", e)

	return logging.getLogger("AGENT")
