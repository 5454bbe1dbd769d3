#!/usr/bin/env python3

import os

# PIP3 modules
from tqdm import tqdm

# local repo modules
from songsplitlib.core import utils
from songsplitlib.media import ffmpeg

#============================================

def clip_path(output_dir: str, prefix: str, index: int, extension: str) -> str:
	return os.path.join(output_dir, f"{prefix}_{index:02d}{extension}")

#============================================

def ensure_output_dir(output_dir: str) -> None:
	if os.path.isdir(output_dir):
		return
	os.makedirs(output_dir, exist_ok=True)
	utils.log(f"Created output directory: {output_dir}")
	return

#============================================

def export_segments(config: dict, segments: list) -> list:
	"""
	Export each song segment as a stream-copied clip, in order.

	A failed export is reported and skipped.

	Args:
		config: Effective config.
		segments: Song intervals.

	Returns:
		list: Paths of the clips that were written, in segment order.
	"""
	input_file = config['input_file']
	output_dir = config['output_dir']
	ensure_output_dir(output_dir)
	extension = os.path.splitext(input_file)[1]
	exported = []
	iter_segments = enumerate(segments, start=1)
	if not utils.is_quiet_mode():
		iter_segments = tqdm(iter_segments, total=len(segments), desc="Exporting",
			unit="clip")
	for index, segment in iter_segments:
		output_file = clip_path(output_dir, config['output_prefix'], index, extension)
		utils.log(f"Exporting segment {index}: {output_file} "
			f"(from {segment.start:.2f}s, duration {segment.duration:.2f}s)")
		try:
			ffmpeg.export_clip(input_file, output_file, segment.start, segment.duration)
		except RuntimeError as error:
			utils.warn(f"error exporting segment {index} to '{output_file}': {error}")
			continue
		exported.append(output_file)
	return exported
