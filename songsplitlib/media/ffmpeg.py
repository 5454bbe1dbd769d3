#!/usr/bin/env python3

from songsplitlib.media.ffmpeg_probe import ProbeError
from songsplitlib.media.ffmpeg_probe import parse_duration
from songsplitlib.media.ffmpeg_probe import probe_duration
from songsplitlib.media.ffmpeg_silence import iter_silence_intervals
from songsplitlib.media.ffmpeg_silence import detect_silence
from songsplitlib.media.ffmpeg_export import export_clip

__all__ = [
	'ProbeError',
	'parse_duration',
	'probe_duration',
	'iter_silence_intervals',
	'detect_silence',
	'export_clip',
]
