"""Newznab XML presenter.

Renders Newznab-compliant caps, RSS and error documents. Element and
attribute names are what indexer managers (Sonarr, Radarr, NZBHydra)
parse; they must not change.
"""

from __future__ import annotations

from dataclasses import dataclass
from xml.etree import ElementTree as ET

from orionzb.domain.entities import (
    NewznabCaps,
    NewznabCategory,
    NewznabItem,
    NewznabSearchMode,
)
from orionzb.infrastructure.newznab.dates import format_rfc2822

NEWZNAB_NS = "http://www.newznab.com/DTD/2010/feeds/attributes/"
ATOM_NS = "http://www.w3.org/2005/Atom"

ET.register_namespace("newznab", NEWZNAB_NS)
ET.register_namespace("atom", ATOM_NS)


@dataclass(frozen=True)
class NewznabRendered:
    """Rendered Newznab XML response."""

    payload: bytes
    media_type: str = "application/xml"


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def _tostring(root: ET.Element) -> NewznabRendered:
    return NewznabRendered(ET.tostring(root, encoding="utf-8", xml_declaration=True))


def _add_search_mode(parent: ET.Element, tag: str, mode: NewznabSearchMode | None) -> None:
    if mode is None:
        return
    ET.SubElement(
        parent,
        tag,
        available=_yes_no(mode.available),
        supportedParams=mode.supported_params,
    )


def _add_category(parent: ET.Element, category: NewznabCategory, tag: str) -> None:
    elem = ET.SubElement(parent, tag, id=category.id, name=category.name)
    for sub in category.subcategories:
        _add_category(elem, sub, "subcat")


def render_caps_xml(caps: NewznabCaps) -> NewznabRendered:
    """Render the ``t=caps`` document.

    Args:
        caps: Server metadata, limits and the category tree.

    Returns:
        NewznabRendered with XML payload.
    """
    root = ET.Element("caps")

    ET.SubElement(
        root,
        "server",
        version=caps.server_version,
        title=caps.server_title,
        strapline=caps.server_strapline,
        email=caps.server_email,
        url=caps.server_url,
        image=caps.server_image,
    )
    ET.SubElement(
        root, "limits", max=str(caps.limits_max), default=str(caps.limits_default)
    )
    ET.SubElement(root, "retention", days=str(caps.retention_days))
    ET.SubElement(
        root,
        "registration",
        available=_yes_no(caps.registration_available),
        open=_yes_no(caps.registration_open),
    )

    searching = ET.SubElement(root, "searching")
    _add_search_mode(searching, "search", caps.search)
    _add_search_mode(searching, "tv-search", caps.tv_search)
    _add_search_mode(searching, "movie-search", caps.movie_search)

    categories = ET.SubElement(root, "categories")
    for category in caps.categories:
        _add_category(categories, category, "category")

    return _tostring(root)


def _add_item(channel: ET.Element, it: NewznabItem) -> None:
    item = ET.SubElement(channel, "item")

    ET.SubElement(item, "title").text = it.title
    ET.SubElement(item, "guid", isPermaLink="false").text = it.guid
    ET.SubElement(item, "link").text = it.link
    if it.comments:
        ET.SubElement(item, "comments").text = it.comments
    ET.SubElement(item, "pubDate").text = format_rfc2822(it.pub_date)
    ET.SubElement(item, "category").text = it.category
    if it.description:
        ET.SubElement(item, "description").text = it.description

    ET.SubElement(
        item,
        "enclosure",
        url=it.enclosure.url,
        length=str(it.enclosure.length),
        type=it.enclosure.type,
    )

    for attr in it.attributes:
        ET.SubElement(item, f"{{{NEWZNAB_NS}}}attr", name=attr.name, value=attr.value)


def _channel(title: str, link: str) -> tuple[ET.Element, ET.Element]:
    rss = ET.Element("rss", attrib={"version": "2.0"})
    channel = ET.SubElement(rss, "channel")
    ET.SubElement(channel, "title").text = title
    ET.SubElement(channel, "description").text = f"{title} API Results"
    ET.SubElement(channel, "link").text = link
    ET.SubElement(channel, "language").text = "en-us"
    return rss, channel


def render_rss_xml(
    *,
    title: str,
    items: list[NewznabItem],
    offset: int,
    total: int,
    base_url: str,
) -> NewznabRendered:
    """Render a search result page.

    ``newznab:response`` carries the page offset and the headline total,
    which may exceed ``len(items)``.
    """
    rss, channel = _channel(title, base_url)

    ET.SubElement(
        channel,
        f"{{{ATOM_NS}}}link",
        href=f"{base_url.rstrip('/')}/api?t=search",
        rel="self",
        type="application/rss+xml",
    )
    ET.SubElement(
        channel, f"{{{NEWZNAB_NS}}}response", offset=str(offset), total=str(total)
    )

    for it in items:
        _add_item(channel, it)

    return _tostring(rss)


def render_details_xml(*, title: str, item: NewznabItem) -> NewznabRendered:
    """Render a single-item channel for ``t=details`` (no response element)."""
    rss, channel = _channel(title, "")
    _add_item(channel, item)
    return _tostring(rss)


def render_error_xml(code: str, description: str) -> NewznabRendered:
    root = ET.Element("error", code=code, description=description)
    return _tostring(root)
