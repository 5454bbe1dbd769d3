#!/usr/bin/env python3

import os

# PIP3 modules
import yaml

# local repo modules
from songsplitlib.core import exporter
from songsplitlib.core import setlist
from songsplitlib.core import utils
from songsplitlib.core.segments import Interval
from songsplitlib.core.segments import derive_song_segments
from songsplitlib.media import ffmpeg
from songsplitlib.remote import rclone

#============================================

def plan_song_segments(silences: list, total_duration: float,
	min_song_length: float) -> list:
	"""
	Decide which intervals to export.

	With no silence at all the whole recording is one song, provided it
	is long enough. Otherwise the gaps between silences are used.

	Args:
		silences: Detected silence intervals.
		total_duration: Recording length in seconds.
		min_song_length: Minimum song length in seconds.

	Returns:
		list: Song intervals to export.
	"""
	if len(silences) == 0:
		utils.log("No silence detected.")
		if total_duration >= min_song_length:
			utils.log("Treating the entire recording as one song.")
			return [Interval(0.0, total_duration)]
		return []
	return derive_song_segments(silences, total_duration, min_song_length)

#============================================

class SplitPipeline():
	def __init__(self, config: dict, dry_run: bool = False):
		self.config = dict(config)
		self.dry_run = dry_run
		self.total_duration = None
		self.silences = []
		self.segments = []
		self.exported_files = []
		self.final_files = []
		self.uploaded = None

	#============================
	def describe_config(self) -> str:
		config = self.config
		return (f"Using config: Input='{config['input_file']}', "
			f"Duration={config['min_silence_duration']:.1f}s, "
			f"Threshold={config['silence_threshold']}, "
			f"MinSong={config['min_song_length']:.1f}s, "
			f"Output='{config['output_dir']}'")

	#============================
	def check_preconditions(self) -> None:
		if self.config['upload_to_drive'] and not self.dry_run:
			rclone.check_remote(self.config['rclone_remote'],
				self.config['drive_subfolder'])
		utils.check_dependency("ffmpeg")
		utils.ensure_file_exists(self.config['input_file'])

	#============================
	def plan(self) -> list:
		input_file = self.config['input_file']
		self.total_duration = ffmpeg.probe_duration(input_file)
		utils.log(f"Total media duration: {self.total_duration:.2f} seconds")
		self.silences = ffmpeg.detect_silence(input_file,
			self.config['silence_threshold'], self.config['min_silence_duration'])
		utils.log(f"Detected {len(self.silences)} silence interval(s).")
		self.segments = plan_song_segments(self.silences, self.total_duration,
			self.config['min_song_length'])
		return self.segments

	#============================
	def dump_plan(self) -> str:
		plan = {
			'input_file': self.config['input_file'],
			'duration': self.total_duration,
			'silences': [silence.as_dict() for silence in self.silences],
			'songs': [],
		}
		extension = os.path.splitext(self.config['input_file'])[1]
		for index, segment in enumerate(self.segments, start=1):
			song = segment.as_dict()
			song['start_tc'] = utils.format_timestamp(segment.start)
			song['end_tc'] = utils.format_timestamp(segment.end)
			song['file'] = exporter.clip_path(self.config['output_dir'],
				self.config['output_prefix'], index, extension)
			plan['songs'].append(song)
		return yaml.safe_dump(plan, sort_keys=False)

	#============================
	def export(self) -> list:
		if len(self.segments) == 0:
			utils.log("No song segments found that meet the minimum length criteria.")
			self.exported_files = []
			return self.exported_files
		utils.log(f"Found {len(self.segments)} non-silent (song) segment(s) that meet criteria.")
		self.exported_files = exporter.export_segments(self.config, self.segments)
		return self.exported_files

	#============================
	def rename(self) -> list:
		self.final_files = list(self.exported_files)
		setlist_file = self.config['setlist_file']
		if setlist_file == "":
			return self.final_files
		if len(self.exported_files) == 0:
			utils.log("Skipping setlist rename, no files were exported.")
			return self.final_files
		self.final_files = setlist.rename_from_setlist(setlist_file, self.exported_files)
		return self.final_files

	#============================
	def upload(self) -> None:
		if not self.config['upload_to_drive']:
			return
		output_dir = self.config['output_dir']
		if not os.path.isdir(output_dir):
			utils.log(f"Skipping upload, output directory '{output_dir}' does not exist.")
			self.uploaded = False
			return
		self.uploaded = rclone.upload_directory(output_dir,
			self.config['rclone_remote'], self.config['drive_subfolder'])

	#============================
	def summary(self) -> dict:
		renamed = 0
		for old_path, new_path in zip(self.exported_files, self.final_files):
			if old_path != new_path:
				renamed += 1
		return {
			'input_file': self.config['input_file'],
			'duration': self.total_duration,
			'silences': len(self.silences),
			'segments': len(self.segments),
			'exported': len(self.exported_files),
			'renamed': renamed,
			'files': list(self.final_files),
			'uploaded': self.uploaded,
		}

	#============================
	def print_summary(self, summary: dict) -> None:
		if utils.is_quiet_mode():
			return
		print("")
		print("Song Splitter Summary")
		print(f"Input: {summary['input_file']}")
		duration = summary['duration']
		print(f"Duration: {utils.format_timestamp(duration)} ({duration:.3f}s)")
		print(f"Silence ranges: {summary['silences']}")
		print(f"Song segments: {summary['segments']}")
		print(f"Exported clips: {summary['exported']}")
		if self.config['setlist_file'] != "":
			print(f"Renamed clips: {summary['renamed']}")
		if summary['uploaded'] is not None:
			print(f"Uploaded: {'yes' if summary['uploaded'] else 'no'}")
		print("")

	#============================
	def run(self) -> dict:
		utils.log("Starting song splitter...")
		utils.log(self.describe_config())
		self.check_preconditions()
		self.plan()
		if self.dry_run:
			print(self.dump_plan())
			return self.summary()
		self.export()
		self.rename()
		self.upload()
		summary = self.summary()
		self.print_summary(summary)
		utils.log("All done!")
		return summary
