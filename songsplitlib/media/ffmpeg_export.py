#!/usr/bin/env python3

import os
from songsplitlib.core import utils

#============================================

def export_clip(input_file: str, output_file: str, start: float,
	duration: float) -> str:
	"""
	Stream-copy a sub-clip without re-encoding.
	"""
	cmd = [
		"ffmpeg", "-y", "-hide_banner", "-loglevel", "error",
		"-i", input_file,
		"-ss", f"{start:.3f}",
		"-t", f"{duration:.3f}",
		"-c:v", "copy",
		"-c:a", "copy",
		output_file,
	]
	utils.run_process(cmd, capture_output=True)
	if not os.path.isfile(output_file):
		raise RuntimeError(f"export failed, no output file: {output_file}")
	return output_file
