#!/usr/bin/env python3

import re
from songsplitlib.core import utils

#============================================

DURATION_RE = re.compile(r"Duration: (\d{2}):(\d{2}):(\d{2})\.(\d{2})")

#============================================

class ProbeError(RuntimeError):
	pass

#============================================

def parse_duration(text: str) -> float:
	"""
	Read the container duration from ffmpeg banner output.

	Args:
		text: ffmpeg stderr text.

	Returns:
		float: Duration in seconds.
	"""
	match = DURATION_RE.search(text or "")
	if match is None:
		raise ProbeError(f"could not parse media duration from ffmpeg output:\n{text}")
	hours, minutes, seconds, hundredths = [float(part) for part in match.groups()]
	return (hours * 3600) + (minutes * 60) + seconds + (hundredths / 100.0)

#============================================

def probe_duration(input_file: str) -> float:
	utils.log("Getting media duration...")
	cmd = ["ffmpeg", "-hide_banner", "-i", input_file]
	# ffmpeg exits non-zero when no output file is given
	proc = utils.run_process(cmd, capture_output=True, check=False)
	return parse_duration(proc.stderr)
