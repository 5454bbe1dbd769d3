#!/usr/bin/env python3

import shlex
import subprocess
from songsplitlib.core import utils

#============================================

def remote_folder(remote: str, subfolder: str) -> str:
	return f"{remote}{subfolder}"

#============================================

def upload_destination(remote: str, subfolder: str, local_dir: str) -> str:
	return f"{remote_folder(remote, subfolder)}/{local_dir}"

#============================================

def check_remote(remote: str, subfolder: str) -> None:
	"""
	Make sure rclone is installed and the destination folder is writable.
	"""
	utils.log("Upload enabled, running rclone pre-check...")
	if not utils.has_dependency("rclone"):
		raise RuntimeError("upload_to_drive is true but 'rclone' was not found in your PATH")
	destination = remote_folder(remote, subfolder)
	utils.log("Verifying rclone remote and permissions...")
	try:
		utils.run_process(["rclone", "mkdir", destination], capture_output=True)
	except RuntimeError as error:
		raise RuntimeError(f"could not access rclone remote '{destination}'. "
			f"Please check 'rclone config' and your remote permissions.\n{error}") from error
	utils.log("rclone connection successful.")
	return

#============================================

def upload_directory(local_dir: str, remote: str, subfolder: str) -> bool:
	"""
	Copy a local folder to the remote. Remote files are never deleted.

	Returns:
		bool: True when rclone finished successfully.
	"""
	utils.log("--- Starting remote upload ---")
	destination = upload_destination(remote, subfolder, local_dir)
	utils.log(f"Uploading local folder '{local_dir}' to '{destination}'")
	cmd = ["rclone", "copy", local_dir, destination, "-P"]
	utils.log(f"CMD: '{shlex.join(cmd)}'")
	# progress output goes straight to the console
	try:
		proc = subprocess.run(cmd)
	except OSError as error:
		utils.warn(f"rclone upload failed: {error}")
		return False
	if proc.returncode != 0:
		utils.warn(f"rclone upload failed with exit status {proc.returncode}. "
			"Please ensure rclone is installed and configured ('rclone config').")
		return False
	utils.log("--- Remote upload complete ---")
	return True
