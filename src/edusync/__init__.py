"""edusync: discourse-unit segmentation and timestamp realignment for transcripts."""

__version__ = "0.1.0"
