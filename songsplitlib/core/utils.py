#!/usr/bin/env python3

import decimal
import os
import shlex
import shutil
import subprocess
import sys

# PIP3 modules
from tqdm import tqdm

#============================================

_QUIET_MODE = False

#============================================

def set_quiet_mode(value: bool) -> None:
	global _QUIET_MODE
	_QUIET_MODE = bool(value)
	return

#============================================

def is_quiet_mode() -> bool:
	return _QUIET_MODE

#============================================

def log(message: str) -> None:
	# tqdm.write keeps an active progress bar intact
	if not _QUIET_MODE:
		tqdm.write(message)
	return

#============================================

def warn(message: str) -> None:
	tqdm.write(f"WARNING: {message}", file=sys.stderr)
	return

#============================================

def run_process(cmd: list, capture_output: bool = True,
	check: bool = True) -> subprocess.CompletedProcess:
	"""
	Run a subprocess command.

	Args:
		cmd: Command list to execute.
		capture_output: Capture stdout and stderr when True.
		check: Raise RuntimeError on a non-zero exit status.

	Returns:
		subprocess.CompletedProcess: The completed process.
	"""
	showcmd = shlex.join(cmd)
	log(f"CMD: '{showcmd}'")
	proc = subprocess.run(cmd, capture_output=capture_output, text=True)
	if check and proc.returncode != 0:
		stderr_text = (proc.stderr or "").strip()
		raise RuntimeError(f"command failed: {showcmd}\n{stderr_text}")
	return proc

#============================================

def has_dependency(cmd_name: str) -> bool:
	return shutil.which(cmd_name) is not None

#============================================

def check_dependency(cmd_name: str) -> None:
	if not has_dependency(cmd_name):
		raise RuntimeError(f"missing dependency: {cmd_name}")
	return

#============================================

def ensure_file_exists(filepath: str) -> None:
	if not os.path.isfile(filepath):
		raise RuntimeError(f"file not found: {filepath}")
	return

#============================================

def format_seconds(seconds: float) -> str:
	"""
	Format seconds for command lines, trimming trailing zeros.
	"""
	value = f"{seconds:.3f}"
	value = value.rstrip('0').rstrip('.')
	if value in ("", "-0"):
		value = "0"
	return value

#============================================

def format_timestamp(seconds: float) -> str:
	"""
	Format seconds as HH:MM:SS.mmm.

	Args:
		seconds: Time in seconds.

	Returns:
		str: Formatted timestamp.
	"""
	value = decimal.Decimal(str(seconds)) * decimal.Decimal(1000)
	value = value.quantize(decimal.Decimal("1"), rounding=decimal.ROUND_HALF_UP)
	total_millis = max(0, int(value))
	hours = total_millis // 3600000
	remainder = total_millis % 3600000
	minutes = remainder // 60000
	remainder = remainder % 60000
	seconds_part = remainder // 1000
	millis_part = remainder % 1000
	return f"{hours:02d}:{minutes:02d}:{seconds_part:02d}.{millis_part:03d}"
