"""
Feed item sources.

Fetching and parsing RSS is done by an external collaborator; this package
only provides bundled sample items and a loader for normalized JSON dumps.
"""
from .sample_feed import get_sample_items, load_feed_file

__all__ = ["get_sample_items", "load_feed_file"]
