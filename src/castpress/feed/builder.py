"""Podcast feed (RSS 2.0 + iTunes) document builder.

Builds the channel element followed by one ``item`` per episode, in the
order the episodes are given. Sorting is the caller's job.
"""

import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Sequence
from datetime import datetime

from markdown_it import MarkdownIt

from castpress.catalog.models import Episode
from castpress.config.schema import ChannelDetails
from castpress.utils.datetime import format_rfc822, now_utc
from castpress.utils.errors import FeedEncodingError

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
INDENT = "    "

ITUNES_NS = "http://www.itunes.com/dtds/podcast-1.0.dtd"
CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"

LANGUAGE = "en-us"
COPYRIGHT = "Copyright 2022"
DOCS_URL = "http://blogs.law.harvard.edu/tech/rss"
PODCAST_TYPE = "Serial"
CATEGORY = "Fiction"
ENCLOSURE_TYPE = "audio/mpeg"

# Raw HTML in markdown is dropped rather than passed through
_markdown = MarkdownIt("commonmark", {"html": False})

# Characters outside the XML 1.0 Char production can't appear in a document
_INVALID_XML_CHARS = re.compile(
    r"[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def render_markdown(text: str) -> str:
    """Render CommonMark to an HTML fragment."""
    return _markdown.render(text)


def xml_safe(value: str) -> str:
    """Drop characters XML 1.0 forbids (control characters, lone surrogates)."""
    return _INVALID_XML_CHARS.sub("", value)


def _text(parent: ET.Element, tag: str, value: str) -> ET.Element:
    element = ET.SubElement(parent, tag)
    element.text = xml_safe(value)
    return element


def _empty(parent: ET.Element, tag: str, **attributes: str) -> ET.Element:
    return ET.SubElement(
        parent, tag, {name: xml_safe(value) for name, value in attributes.items()}
    )


def add_episode_item(channel: ET.Element, episode: Episode) -> ET.Element:
    """Append the ``item`` element for one episode."""
    item = ET.SubElement(channel, "item")

    _text(item, "title", episode.title)
    _text(item, "itunes:subtitle", episode.summary)
    if episode.link is not None:
        _text(item, "link", episode.link)
    _text(item, "guid", episode.id)
    _empty(
        item,
        "enclosure",
        url=episode.media.url,
        length=str(episode.media.bytes),
        type=ENCLOSURE_TYPE,
    )
    _text(item, "pubDate", format_rfc822(episode.released_at))

    description = render_markdown(episode.description)
    _text(item, "description", description)
    _text(item, "itunes:summary", description)

    _text(item, "itunes:duration", str(episode.media.duration))
    _text(item, "itunes:season", str(episode.season))
    _text(item, "itunes:episode", str(episode.episode_number))
    _empty(item, "itunes:image", href=episode.image)
    _text(item, "itunes:title", episode.title)

    return item


def _add_channel_details(
    channel: ET.Element, details: ChannelDetails, built_at: datetime
) -> None:
    _text(channel, "title", details.title)
    # Rendered from the title, not the description field
    _text(channel, "description", render_markdown(details.title))
    if details.link is not None:
        _text(channel, "link", details.link)
    _text(channel, "language", LANGUAGE)
    _text(channel, "copyright", COPYRIGHT)

    timestamp = format_rfc822(built_at)
    _text(channel, "lastBuildDate", timestamp)
    _text(channel, "pubDate", timestamp)

    _text(channel, "docs", DOCS_URL)
    _text(channel, "webMaster", details.owner.email)
    _text(channel, "itunes:type", PODCAST_TYPE)
    _text(channel, "itunes:author", details.owner.email)
    _text(channel, "itunes:subtitle", details.subtitle)
    _text(channel, "itunes:summary", render_markdown(details.summary))

    owner = ET.SubElement(channel, "itunes:owner")
    _text(owner, "itunes:name", details.owner.name)
    _text(owner, "itunes:email", details.owner.email)

    _text(channel, "itunes:explicit", "Yes" if details.explicit else "No")
    _empty(channel, "itunes:image", href=details.image)
    _empty(channel, "itunes:category", text=CATEGORY)


def build_feed(
    channel: ChannelDetails,
    episodes: Sequence[Episode],
    built_at: datetime | None = None,
) -> str:
    """Build the feed document for a channel.

    Args:
        channel: Channel metadata
        episodes: Episodes in the order they should appear
        built_at: Build/publish timestamp (default: now)

    Returns:
        The XML document, declaration included

    Raises:
        FeedEncodingError: If the document can't be encoded as UTF-8
    """
    rss = ET.Element(
        "rss",
        {
            "xmlns:itunes": ITUNES_NS,
            "xmlns:content": CONTENT_NS,
            "version": "2.0",
        },
    )
    channel_element = ET.SubElement(rss, "channel")

    _add_channel_details(channel_element, channel, built_at or now_utc())
    for episode in episodes:
        add_episode_item(channel_element, episode)

    ET.indent(rss, space=INDENT)

    try:
        body = ET.tostring(rss, encoding="utf-8")
        document = f"{XML_DECLARATION}\n".encode("utf-8") + body
        text = document.decode("utf-8")
    except UnicodeError as e:
        raise FeedEncodingError(f"Feed document is not valid UTF-8: {e}") from e

    logger.info("Built feed '%s' with %d episode(s)", channel.title, len(episodes))
    return text
