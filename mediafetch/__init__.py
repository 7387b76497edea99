"""Media Fetcher: image/video search aggregation and download relay."""

__version__ = "1.0.0"
