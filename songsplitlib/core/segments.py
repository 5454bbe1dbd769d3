#!/usr/bin/env python3

"""
Derive song intervals from detected silence intervals.
"""

# Standard Library
import typing

#============================================

# trailing candidates at or below this length are detector rounding slivers
TAIL_EPSILON = 0.1

#============================================

class Interval(typing.NamedTuple):
	"""
	Closed-open time range [start, end) in seconds.
	"""
	start: float
	end: float

	#============================
	@property
	def duration(self) -> float:
		return self.end - self.start

	#============================
	def as_dict(self) -> dict:
		return {
			'start': self.start,
			'end': self.end,
			'duration': self.duration,
		}

#============================================

def derive_song_segments(silences: list, total_duration: float,
	min_song_length: float) -> list:
	"""
	Compute song intervals as the gaps around silence intervals.

	The silences must be sorted by start and must not overlap, and
	total_duration must not be less than the last silence end. Neither is
	checked; malformed input only yields candidates that fail the length
	filter.

	Args:
		silences: Silence intervals in ascending order.
		total_duration: Full timeline length in seconds.
		min_song_length: Minimum seconds for a segment to be kept.

	Returns:
		list: Song intervals in chronological order, possibly empty.
	"""
	songs = []
	if len(silences) == 0:
		return songs
	leading = Interval(0.0, silences[0].start)
	if leading.duration >= min_song_length:
		songs.append(leading)
	for current, following in zip(silences, silences[1:]):
		candidate = Interval(current.end, following.start)
		if candidate.duration >= min_song_length:
			songs.append(candidate)
	# only the tail gets the epsilon guard
	trailing = Interval(silences[-1].end, total_duration)
	if trailing.duration > TAIL_EPSILON and trailing.duration >= min_song_length:
		songs.append(trailing)
	return songs
