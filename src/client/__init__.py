"""Python client for the Bookmarks API: HTTP wrapper, paged feed and capture helpers."""
from client.api_client import ApiClientError, BookmarksApiClient
from client.capture import CapturePopup, build_capture_payload, parse_tag_input
from client.feed import BookmarkFeed, FeedFilters, group_by_date

__all__ = [
    "ApiClientError",
    "BookmarkFeed",
    "BookmarksApiClient",
    "CapturePopup",
    "FeedFilters",
    "build_capture_payload",
    "group_by_date",
    "parse_tag_input",
]
