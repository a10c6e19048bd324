"""ytd-size — estimate the download size of a YouTube channel catalog.

Picks the best video-only and audio-only stream of every video and sums
their byte sizes.  Metadata comes from the yt-dlp Python API.
"""

from ytd_size.version import __version__

__all__: list[str] = ["__version__"]
