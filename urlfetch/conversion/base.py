"""Converter base class.

Each converter implements one ``from_<family>`` method per ContentFamily.
The methods are abstract, so a converter missing a family cannot be
instantiated, and dispatch never falls through to a wrong default.
"""

from abc import ABC, abstractmethod

from urlfetch.constants import ContentFamily
from urlfetch.errors import ConversionError, FetchError

HANDLER_NAMES = {
    ContentFamily.JSON: "from_json",
    ContentFamily.HTML: "from_html",
    ContentFamily.MARKDOWN: "from_markdown",
    ContentFamily.XML: "from_xml",
    ContentFamily.CSV: "from_csv",
    ContentFamily.TEXT: "from_text",
}

if set(HANDLER_NAMES) != set(ContentFamily):
    raise RuntimeError("every content family needs a handler")


class Converter(ABC):
    """Converts content of any family into ``target``."""

    target: ContentFamily
    display_name: str

    def convert(self, content: str, source: ContentFamily, source_url: str) -> str:
        """Convert content classified as ``source`` into the target family.

        Raises:
            ConversionError: the content cannot be represented in the target family
        """
        handler = getattr(self, HANDLER_NAMES[source])
        try:
            return handler(content, source_url)
        except ConversionError:
            raise
        except (FetchError, ValueError, KeyError, TypeError, RecursionError) as e:
            raise ConversionError(self.display_name, e) from e

    @abstractmethod
    def from_json(self, content: str, source_url: str) -> str: ...

    @abstractmethod
    def from_html(self, content: str, source_url: str) -> str: ...

    @abstractmethod
    def from_markdown(self, content: str, source_url: str) -> str: ...

    @abstractmethod
    def from_xml(self, content: str, source_url: str) -> str: ...

    @abstractmethod
    def from_csv(self, content: str, source_url: str) -> str: ...

    @abstractmethod
    def from_text(self, content: str, source_url: str) -> str: ...
