#!/usr/bin/env python3

import argparse
import sys
from songsplitlib.core import config as config_lib
from songsplitlib.core import utils
from songsplitlib.core.pipeline import SplitPipeline

#============================================

# argparse dests that carry config values
CLI_CONFIG_KEYS = (
	'input_file',
	'min_silence_duration',
	'silence_threshold',
	'min_song_length',
	'output_prefix',
	'output_dir',
	'upload_to_drive',
	'rclone_remote',
	'drive_subfolder',
	'setlist_file',
)

#============================================

def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		description="Split a long recording into per-song clips at silences")
	parser.add_argument('-c', '--config', dest='config_file',
		default=config_lib.DEFAULT_CONFIG_PATH,
		help='path to config JSON (or YAML) file')
	parser.add_argument('-i', '--input', dest='input_file',
		help='input media file')
	parser.add_argument('-d', '--duration', dest='min_silence_duration', type=float,
		help='minimum silence duration in seconds')
	parser.add_argument('-t', '--threshold', dest='silence_threshold',
		help="silence threshold in dB, e.g. -30dB")
	parser.add_argument('-m', '--min-song-length', '--minsonglength',
		dest='min_song_length', type=float,
		help='minimum song length in seconds, 0 exports everything')
	parser.add_argument('-p', '--prefix', dest='output_prefix',
		help='output file prefix')
	parser.add_argument('-o', '--output', dest='output_dir',
		help='output directory')
	parser.add_argument('-u', '--upload', dest='upload_to_drive', action='store_true',
		help='upload the output folder with rclone')
	parser.add_argument('-U', '--no-upload', dest='upload_to_drive', action='store_false',
		help='do not upload, even if the config file enables it')
	parser.add_argument('-r', '--remote', dest='rclone_remote',
		help="rclone remote name, e.g. 'gdrive:'")
	parser.add_argument('-s', '--subfolder', dest='drive_subfolder',
		help='remote subfolder to upload to')
	parser.add_argument('-l', '--setlist', dest='setlist_file',
		help='text file with one song title per line for renaming')
	parser.add_argument('-n', '--dry-run', dest='dry_run', action='store_true',
		help='detect and print the planned songs, do not export')
	parser.add_argument('-q', '--quiet', dest='quiet', action='store_true',
		help='only print warnings')
	parser.set_defaults(upload_to_drive=None)
	return parser

#============================================

# flags whose value may itself start with '-', e.g. -30dB
NEGATIVE_VALUE_FLAGS = ('-t', '--threshold')

#============================================

def attach_negative_values(argv: list) -> list:
	"""
	Rewrite "--threshold -30dB" as "--threshold=-30dB".

	argparse reads a value like -30dB as another option.
	"""
	joined = []
	index = 0
	while index < len(argv):
		arg = argv[index]
		has_value = index + 1 < len(argv)
		if arg in NEGATIVE_VALUE_FLAGS and has_value and argv[index + 1].startswith('-'):
			joined.append(f"--threshold={argv[index + 1]}")
			index += 2
			continue
		joined.append(arg)
		index += 1
	return joined

#============================================

def parse_args(argv: list = None) -> argparse.Namespace:
	"""
	Parse command-line arguments.
	"""
	if argv is None:
		argv = sys.argv[1:]
	parser = build_parser()
	args = parser.parse_args(attach_negative_values(list(argv)))
	return args

#============================================

def explicit_cli_values(args: argparse.Namespace) -> dict:
	"""
	Collect only the settings given on the command line.
	"""
	values = {}
	for key in CLI_CONFIG_KEYS:
		value = getattr(args, key)
		if value is not None:
			values[key] = value
	return values

#============================================

def run(argv: list = None) -> dict:
	args = parse_args(argv)
	utils.set_quiet_mode(args.quiet)
	config = config_lib.build_config(args.config_file, explicit_cli_values(args))
	pipeline = SplitPipeline(config, dry_run=args.dry_run)
	return pipeline.run()

#============================================

def main() -> None:
	run()
	return


if __name__ == '__main__':
	main()
