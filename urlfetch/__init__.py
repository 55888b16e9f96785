"""URL fetcher: retrieve a URL and convert it to JSON, HTML, Markdown or plain text."""

from urlfetch.constants import SERVER_VERSION as __version__

__all__ = ["__version__"]
