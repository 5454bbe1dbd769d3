#!/usr/bin/env python3

"""
Unit tests for layered config loading.
"""

# Standard Library
import json
import os
import sys
import tempfile
import unittest
from unittest import mock

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# local repo modules
import songsplit_cli
from songsplitlib.core import config as config_lib

#============================================

def _write_json(path: str, data) -> None:
	with open(path, "w") as handle:
		json.dump(data, handle)

#============================================

def _config_from_argv(argv: list) -> dict:
	args = songsplit_cli.parse_args(argv)
	return config_lib.build_config(args.config_file,
		songsplit_cli.explicit_cli_values(args))

#============================================

class ConfigLoadingTest(unittest.TestCase):
	#============================================
	def test_defaults_when_file_missing(self) -> None:
		"""A missing config file is ignored without a warning."""
		with tempfile.TemporaryDirectory() as temp_dir:
			missing = os.path.join(temp_dir, "non-existent-file.json")
			with mock.patch("songsplitlib.core.utils.warn") as warn:
				config = _config_from_argv(["-c", missing])
			warn.assert_not_called()
		self.assertEqual(config, config_lib.default_config())

	#============================================
	def test_file_overrides_defaults(self) -> None:
		with tempfile.TemporaryDirectory() as temp_dir:
			config_path = os.path.join(temp_dir, "config.json")
			_write_json(config_path, {
				'input_file': "file_video.mp4",
				'silence_threshold': "-20dB",
				'min_song_length': 60.0,
				'upload_to_drive': True,
				'drive_subfolder': "FileFolder",
			})
			config = _config_from_argv(["-c", config_path])
		self.assertEqual(config['input_file'], "file_video.mp4")
		self.assertEqual(config['silence_threshold'], "-20dB")
		self.assertEqual(config['min_song_length'], 60.0)
		self.assertTrue(config['upload_to_drive'])
		self.assertEqual(config['drive_subfolder'], "FileFolder")
		self.assertEqual(config['rclone_remote'], "gdrive:")

	#============================================
	def test_cli_overrides_file(self) -> None:
		with tempfile.TemporaryDirectory() as temp_dir:
			config_path = os.path.join(temp_dir, "config.json")
			_write_json(config_path, {
				'input_file': "file_video.mp4",
				'min_song_length': 60.0,
				'upload_to_drive': False,
			})
			config = _config_from_argv([
				"-c", config_path,
				"-i", "cli_video.mp4",
				"--upload",
				"--subfolder", "CLIFolder",
			])
		self.assertEqual(config['input_file'], "cli_video.mp4")
		self.assertTrue(config['upload_to_drive'])
		self.assertEqual(config['drive_subfolder'], "CLIFolder")
		self.assertEqual(config['min_song_length'], 60.0)

	#============================================
	def test_explicit_false_beats_file_true(self) -> None:
		with tempfile.TemporaryDirectory() as temp_dir:
			config_path = os.path.join(temp_dir, "config.json")
			_write_json(config_path, {'upload_to_drive': True})
			config = _config_from_argv(["-c", config_path, "--no-upload"])
		self.assertFalse(config['upload_to_drive'])

	#============================================
	def test_zero_min_song_length_from_cli(self) -> None:
		with tempfile.TemporaryDirectory() as temp_dir:
			config_path = os.path.join(temp_dir, "config.json")
			_write_json(config_path, {'min_song_length': 120})
			config = _config_from_argv(["-c", config_path, "-m", "0"])
		self.assertEqual(config['min_song_length'], 0.0)

	#============================================
	def test_malformed_file_warns_and_uses_defaults(self) -> None:
		with tempfile.TemporaryDirectory() as temp_dir:
			config_path = os.path.join(temp_dir, "config.json")
			with open(config_path, "w") as handle:
				handle.write("{not json")
			with mock.patch("songsplitlib.core.utils.warn") as warn:
				config = _config_from_argv(["-c", config_path])
			warn.assert_called_once()
		self.assertEqual(config, config_lib.default_config())

	#============================================
	def test_non_mapping_file_warns(self) -> None:
		with tempfile.TemporaryDirectory() as temp_dir:
			config_path = os.path.join(temp_dir, "config.json")
			_write_json(config_path, ["input_file"])
			with mock.patch("songsplitlib.core.utils.warn") as warn:
				values = config_lib.load_config_file(config_path)
			warn.assert_called_once()
		self.assertEqual(values, {})

	#============================================
	def test_yaml_config_file(self) -> None:
		with tempfile.TemporaryDirectory() as temp_dir:
			config_path = os.path.join(temp_dir, "config.yaml")
			with open(config_path, "w") as handle:
				handle.write("input_file: gig.mkv\n")
				handle.write("silence_threshold: -30\n")
				handle.write("upload_to_drive: yes\n")
			values = config_lib.load_config_file(config_path)
		self.assertEqual(values['input_file'], "gig.mkv")
		self.assertEqual(values['silence_threshold'], "-30dB")
		self.assertTrue(values['upload_to_drive'])

	#============================================
	def test_null_values_are_ignored(self) -> None:
		values = config_lib.normalize_values({'output_dir': None, 'output_prefix': "Take"},
			"test")
		self.assertEqual(values, {'output_prefix': "Take"})

	#============================================
	def test_merge_does_not_modify_layers(self) -> None:
		defaults = config_lib.default_config()
		file_values = {'output_dir': "from_file", 'upload_to_drive': True}
		cli_values = {'upload_to_drive': False}
		merged = config_lib.merge_config(defaults, file_values, cli_values)
		self.assertEqual(merged['output_dir'], "from_file")
		self.assertFalse(merged['upload_to_drive'])
		self.assertEqual(defaults, config_lib.default_config())
		self.assertEqual(file_values, {'output_dir': "from_file", 'upload_to_drive': True})

	#============================================
	def test_negative_min_song_length_rejected(self) -> None:
		with tempfile.TemporaryDirectory() as temp_dir:
			missing = os.path.join(temp_dir, "missing.json")
			with self.assertRaises(RuntimeError):
				_config_from_argv(["-c", missing, "-m", "-5"])

	#============================================
	def test_negative_threshold_flag_forms(self) -> None:
		"""Thresholds start with '-', which argparse would take for a flag."""
		with tempfile.TemporaryDirectory() as temp_dir:
			missing = os.path.join(temp_dir, "missing.json")
			self.assertEqual(_config_from_argv(["-c", missing, "-t", "-30"])
				['silence_threshold'], "-30dB")
			self.assertEqual(_config_from_argv(["-c", missing, "--threshold", "-30dB"])
				['silence_threshold'], "-30dB")
			self.assertEqual(_config_from_argv(["-c", missing, "-t", "-12.5dB", "-m", "0"])
				['silence_threshold'], "-12.5dB")
			config = _config_from_argv(["-c", missing, "-t", "-20dB", "-i", "gig.mp4"])
		self.assertEqual(config['silence_threshold'], "-20dB")
		self.assertEqual(config['input_file'], "gig.mp4")

	#============================================
	def test_normalize_threshold(self) -> None:
		self.assertEqual(config_lib.normalize_threshold(-30), "-30dB")
		self.assertEqual(config_lib.normalize_threshold("-30"), "-30dB")
		self.assertEqual(config_lib.normalize_threshold(" -12dB "), "-12dB")
		self.assertEqual(config_lib.normalize_threshold("0.01"), "0.01")

	#============================================
	def test_non_finite_numbers_rejected(self) -> None:
		with tempfile.TemporaryDirectory() as temp_dir:
			missing = os.path.join(temp_dir, "missing.json")
			with self.assertRaises(RuntimeError):
				_config_from_argv(["-c", missing, "-m", "nan"])
			with self.assertRaises(RuntimeError):
				_config_from_argv(["-c", missing, "-d", "inf"])
			config_path = os.path.join(temp_dir, "config.json")
			_write_json(config_path, {'min_song_length': "nan"})
			with mock.patch("songsplitlib.core.utils.warn") as warn:
				values = config_lib.load_config_file(config_path)
			warn.assert_called_once()
		self.assertEqual(values, {})

	#============================================
	def test_bad_value_type_rejected(self) -> None:
		with self.assertRaises(RuntimeError):
			config_lib.normalize_values({'min_silence_duration': "long"}, "test")
		with self.assertRaises(RuntimeError):
			config_lib.normalize_values({'upload_to_drive': "maybe"}, "test")

#============================================

def main() -> None:
	"""Run the unit tests."""
	unittest.main()

#============================================

if __name__ == "__main__":
	main()
