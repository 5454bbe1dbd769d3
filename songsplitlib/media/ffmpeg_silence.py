#!/usr/bin/env python3

import re
from songsplitlib.core import utils
from songsplitlib.core.segments import Interval

#============================================

# silencedetect prints %.6g, so small values can use an exponent
TIMESTAMP_PATTERN = r"(-?\d+(?:\.\d*)?(?:[eE][-+]?\d+)?)"
SILENCE_START_RE = re.compile(r"silence_start: " + TIMESTAMP_PATTERN)
SILENCE_END_RE = re.compile(r"silence_end: " + TIMESTAMP_PATTERN)

#============================================

def build_silence_filter(threshold: str, min_gap: float) -> str:
	return f"silencedetect=noise={threshold}:d={utils.format_seconds(min_gap)}"

#============================================

def iter_silence_intervals(text: str):
	"""
	Yield silence intervals from silencedetect log text.

	Start and end markers are paired in the order they appear; a start
	with no matching end is dropped.

	Args:
		text: ffmpeg stderr text.

	Yields:
		Interval: Detected silence.
	"""
	starts = SILENCE_START_RE.finditer(text or "")
	ends = SILENCE_END_RE.finditer(text or "")
	for start_match, end_match in zip(starts, ends):
		yield Interval(float(start_match.group(1)), float(end_match.group(1)))

#============================================

def detect_silence(input_file: str, threshold: str, min_gap: float) -> list:
	utils.log("Detecting silence... This may take a few minutes.")
	cmd = [
		"ffmpeg", "-hide_banner", "-nostats",
		"-i", input_file,
		"-af", build_silence_filter(threshold, min_gap),
		"-f", "null", "-",
	]
	proc = utils.run_process(cmd, capture_output=True)
	return list(iter_silence_intervals(proc.stderr))
