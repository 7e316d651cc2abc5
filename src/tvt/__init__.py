"""Terminal Video Transcoder.

Inspect media files, convert between container formats and extract audio
by driving ffprobe and ffmpeg with validated, shell-free argument vectors.
"""

__version__ = "0.1.0"
