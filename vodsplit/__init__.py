"""
vodsplit - split downloaded videos into upload-sized parts

This package takes videos that were already downloaded and:
- Splits each one into numbered segments with ffmpeg (stream copy, no re-encode)
- Joins an undersized trailing segment into its predecessor when the
  combined duration stays under the hard cap
- Tracks per-video status in a SQLite store so runs can be resumed

Videos are processed one at a time; a failing video never aborts the batch.
"""

__version__ = "0.1.0"
