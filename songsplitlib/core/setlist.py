#!/usr/bin/env python3

"""
Rename exported clips from a setlist text file.
"""

# Standard Library
import os
import re

# local repo modules
from songsplitlib.core import utils

#============================================

UNTITLED_SONG = "Untitled_Song"
INVALID_TITLE_CHARS = re.compile(r"[^\w\s\-]", re.ASCII)

#============================================

def read_setlist(setlist_file: str) -> list:
	"""
	Read song titles, one per line, skipping blank lines.

	Args:
		setlist_file: Setlist text file path.

	Returns:
		list: Titles in file order.
	"""
	titles = []
	with open(setlist_file, 'r', encoding='utf-8') as handle:
		for line in handle:
			title = line.rstrip("\r\n")
			if title.strip() == "":
				continue
			titles.append(title)
	return titles

#============================================

def sanitize_title(title: str) -> str:
	"""
	Turn a song title into a safe file name stem.

	Args:
		title: Raw title.

	Returns:
		str: Sanitized title.
	"""
	name = title.strip()
	name = INVALID_TITLE_CHARS.sub("", name)
	name = name.replace(" ", "_")
	if name == "":
		name = UNTITLED_SONG
	return name

#============================================

def build_renamed_path(file_path: str, index: int, title: str) -> str:
	directory = os.path.dirname(file_path)
	extension = os.path.splitext(file_path)[1]
	new_name = f"{index:02d} - {sanitize_title(title)}{extension}"
	return os.path.join(directory, new_name)

#============================================

def rename_files(exported_files: list, titles: list) -> list:
	"""
	Pair files with titles by position and rename them.

	Files past the end of the title list keep their names and extra
	titles are ignored. A failed rename is reported and skipped.

	Args:
		exported_files: Clip paths in export order.
		titles: Song titles in setlist order.

	Returns:
		list: Final path of every file, in export order.
	"""
	if len(titles) < len(exported_files):
		utils.warn(f"setlist has {len(titles)} songs, but {len(exported_files)} "
			f"files were exported. Only the first {len(titles)} files will be renamed.")
	elif len(titles) > len(exported_files):
		utils.warn(f"setlist has {len(titles)} songs, but only "
			f"{len(exported_files)} files were exported.")
	final_paths = list(exported_files)
	for index, (old_path, title) in enumerate(zip(exported_files, titles), start=1):
		new_path = build_renamed_path(old_path, index, title)
		try:
			os.rename(old_path, new_path)
		except OSError as error:
			utils.warn(f"error renaming '{old_path}' to '{new_path}': {error}")
			continue
		utils.log(f"Renamed '{os.path.basename(old_path)}' -> '{os.path.basename(new_path)}'")
		final_paths[index - 1] = new_path
	return final_paths

#============================================

def rename_from_setlist(setlist_file: str, exported_files: list) -> list:
	utils.log("--- Renaming files from setlist ---")
	try:
		titles = read_setlist(setlist_file)
	except (OSError, UnicodeDecodeError) as error:
		utils.warn(f"could not read setlist file '{setlist_file}': {error}. Skipping rename.")
		return list(exported_files)
	final_paths = rename_files(exported_files, titles)
	utils.log("--- Setlist renaming complete ---")
	return final_paths
