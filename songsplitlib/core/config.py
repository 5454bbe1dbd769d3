#!/usr/bin/env python3

"""
Layered configuration: built-in defaults, a config file, then CLI flags.
"""

# Standard Library
import json
import math
import os

# PIP3 modules
import yaml

# local repo modules
from songsplitlib.core import utils

#============================================

DEFAULT_CONFIG_PATH = "config.json"

FLOAT_KEYS = ('min_silence_duration', 'min_song_length')
BOOL_KEYS = ('upload_to_drive',)
STRING_KEYS = (
	'input_file',
	'silence_threshold',
	'output_prefix',
	'output_dir',
	'rclone_remote',
	'drive_subfolder',
	'setlist_file',
)

#============================================

def default_config() -> dict:
	"""
	Build the default config dictionary.

	Returns:
		dict: Default configuration values.
	"""
	return {
		'input_file': "practice_session.mp4",
		'min_silence_duration': 2.0,
		'silence_threshold': "-12dB",
		'min_song_length': 200.0,
		'output_prefix': "Song",
		'output_dir': "output",
		'upload_to_drive': False,
		'rclone_remote': "gdrive:",
		'drive_subfolder': "SplitSongs",
		'setlist_file': "",
	}

#============================================

def coerce_bool(value, source: str, key: str) -> bool:
	if isinstance(value, bool):
		return value
	if isinstance(value, int):
		return bool(value)
	if isinstance(value, str):
		normalized = value.strip().lower()
		if normalized in ("true", "yes", "1", "on"):
			return True
		if normalized in ("false", "no", "0", "off"):
			return False
	raise RuntimeError(f"config {source}: {key} must be a boolean")

#============================================

def coerce_float(value, source: str, key: str) -> float:
	if isinstance(value, bool):
		raise RuntimeError(f"config {source}: {key} must be a number")
	number = None
	if isinstance(value, (int, float)):
		number = float(value)
	elif isinstance(value, str):
		try:
			number = float(value)
		except ValueError:
			pass
	if number is None or not math.isfinite(number):
		raise RuntimeError(f"config {source}: {key} must be a number")
	return number

#============================================

def normalize_threshold(value) -> str:
	"""
	Render a silencedetect noise threshold.

	A bare zero or negative number such as -30 or "-30" is read as
	decibels. Anything else (e.g. "-12dB" or an amplitude ratio like
	0.01) is kept as written.
	"""
	text = str(value).strip()
	try:
		number = float(text)
	except ValueError:
		return text
	if not math.isfinite(number) or number > 0:
		return text
	return f"{number:g}dB"

#============================================

def coerce_str(value, source: str, key: str) -> str:
	if key == 'silence_threshold':
		if isinstance(value, (str, int, float)) and not isinstance(value, bool):
			return normalize_threshold(value)
		raise RuntimeError(f"config {source}: {key} must be a string or number")
	if isinstance(value, str):
		return value
	raise RuntimeError(f"config {source}: {key} must be a string")

#============================================

def normalize_values(raw: dict, source: str) -> dict:
	"""
	Coerce known keys to their types and drop unset (None) values.

	Args:
		raw: Raw key/value mapping.
		source: Label used in error messages.

	Returns:
		dict: Normalized values for the keys present in raw.
	"""
	values = {}
	for key, value in raw.items():
		if value is None:
			continue
		if key in FLOAT_KEYS:
			values[key] = coerce_float(value, source, key)
		elif key in BOOL_KEYS:
			values[key] = coerce_bool(value, source, key)
		elif key in STRING_KEYS:
			values[key] = coerce_str(value, source, key)
		else:
			utils.warn(f"config {source}: ignoring unknown key '{key}'")
	return values

#============================================

def read_config_file(config_path: str) -> dict:
	"""
	Parse a config file into a mapping.

	JSON is the native format; files ending in .yaml or .yml are read
	with PyYAML.

	Args:
		config_path: Config file path.

	Returns:
		dict: Parsed config mapping.
	"""
	extension = os.path.splitext(config_path)[1].lower()
	with open(config_path, 'r', encoding='utf-8') as handle:
		if extension in ('.yaml', '.yml'):
			data = yaml.safe_load(handle)
		else:
			data = json.load(handle)
	if data is None:
		data = {}
	if not isinstance(data, dict):
		raise RuntimeError("config file must be a mapping")
	return data

#============================================

def load_config_file(config_path: str) -> dict:
	"""
	Load the file layer of the config.

	A missing file is silently ignored. A file that cannot be read or
	parsed produces a warning and contributes nothing.

	Args:
		config_path: Config file path, may be None.

	Returns:
		dict: Normalized values found in the file.
	"""
	if config_path is None or not os.path.exists(config_path):
		return {}
	try:
		data = read_config_file(config_path)
		return normalize_values(data, config_path)
	except (OSError, ValueError, yaml.YAMLError, RuntimeError) as error:
		utils.warn(f"could not parse config file '{config_path}': {error}. Using defaults.")
		return {}

#============================================

def merge_config(defaults: dict, file_values: dict, cli_values: dict) -> dict:
	"""
	Resolve the effective config from three layers.

	Later layers win for every key they contain. cli_values must hold only
	the flags the user actually passed, so an explicit false still
	overrides a true from the file.

	Args:
		defaults: Built-in defaults.
		file_values: Values from the config file.
		cli_values: Explicitly provided command-line values.

	Returns:
		dict: New merged config; the inputs are not modified.
	"""
	merged = dict(defaults)
	merged.update(file_values)
	merged.update(cli_values)
	return merged

#============================================

def validate_config(config: dict) -> None:
	if config['min_song_length'] < 0:
		raise RuntimeError("min_song_length must be 0 or positive")
	if config['min_silence_duration'] <= 0:
		raise RuntimeError("min_silence_duration must be positive")
	if config['output_prefix'] == "":
		raise RuntimeError("output_prefix must not be empty")
	if config['output_dir'] == "":
		raise RuntimeError("output_dir must not be empty")
	if config['silence_threshold'].strip() == "":
		raise RuntimeError("silence_threshold must not be empty")
	return

#============================================

def build_config(config_path: str, cli_values: dict) -> dict:
	"""
	Load, merge and validate the run config.

	Args:
		config_path: Config file path.
		cli_values: Explicit command-line values, None meaning not given.

	Returns:
		dict: Effective config.
	"""
	file_values = load_config_file(config_path)
	explicit = normalize_values(cli_values, "command line")
	config = merge_config(default_config(), file_values, explicit)
	validate_config(config)
	return config
