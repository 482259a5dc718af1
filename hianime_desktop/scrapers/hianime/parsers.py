"""
HTML extraction for HiAnime pages
Turns listing, detail, genre and schedule markup into plain dict records.

Every accessor degrades to an empty string or empty list when the markup
is missing a node; only the JSON episode sources payload can raise.
"""
import json
import re
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag

from ...core.errors import ParseError

ANIME_TYPES = ["TV", "Movie", "OVA", "ONA", "Special"]
DEFAULT_TYPE = "TV"
WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
EPISODES_RE = re.compile(r"(\d+)\s*eps?", re.IGNORECASE)

Markup = Union[str, bytes, BeautifulSoup]


def _soup(markup: Markup) -> BeautifulSoup:
    if isinstance(markup, BeautifulSoup):
        return markup
    return BeautifulSoup(markup or "", "html.parser")


def _text(node: Optional[Tag]) -> str:
    return node.get_text(strip=True) if node is not None else ""


def _attr(node: Optional[Tag], name: str) -> str:
    if node is None:
        return ""
    value = node.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return (value or "").strip()


def slug_from_url(url: str) -> str:
    """Last non-empty path segment of a URL, ignoring the query string"""
    path = urlparse(url or "").path
    segments = [s for s in path.split("/") if s]
    return segments[-1] if segments else ""


# === Metadata field parsers ===

def extract_year(text: str) -> str:
    match = YEAR_RE.search(text or "")
    return match.group(0) if match else ""


def extract_type(text: str) -> str:
    """First known type found in text, in priority order; TV when none is"""
    text = text or ""
    for anime_type in ANIME_TYPES:
        if anime_type in text:
            return anime_type
    return DEFAULT_TYPE


def extract_episodes(text: str) -> str:
    match = EPISODES_RE.search(text or "")
    return match.group(1) if match else ""


# === Page shapes ===

def extract_listing(html: Markup) -> List[Dict[str, str]]:
    """
    Parse every listing card on a browse or search page

    Returns:
        List of {id, title, poster, url, year, type, episodes}
    """
    soup = _soup(html)
    results = []
    for card in soup.select(".flw-item"):
        link = card.select_one(".film-poster a")
        img = card.select_one(".film-poster img")
        title = card.select_one(".film-detail .film-name a")
        meta = card.select_one(".film-detail .fd-infor")

        url = _attr(link, "href")
        meta_text = meta.get_text(" ", strip=True) if meta is not None else ""

        results.append({
            "id": slug_from_url(url),
            "title": _text(title),
            "poster": _attr(img, "data-src") or _attr(img, "src"),
            "url": url,
            "year": extract_year(meta_text),
            "type": extract_type(meta_text),
            "episodes": extract_episodes(meta_text),
        })
    return results


def _metadata_label(item: Tag) -> str:
    label = _text(item.select_one(".item-title") or item.select_one(".item-head"))
    return label.rstrip(":").strip().lower()


def extract_episode_list(html: Markup) -> List[Dict[str, Any]]:
    """
    Parse the episode block. Numbers are positional (1..N in document
    order); whatever number the site prints is ignored.
    """
    soup = _soup(html)
    episodes = []
    for index, anchor in enumerate(soup.select(".ss-list a")):
        number = index + 1
        episodes.append({
            "number": number,
            "title": _text(anchor) or f"Episode {number}",
            "url": _attr(anchor, "href"),
            "id": _attr(anchor, "data-id"),
        })
    return episodes


def extract_detail(html: Markup) -> Dict[str, Any]:
    """Parse an anime detail page into a single record"""
    soup = _soup(html)

    title = _text(
        soup.select_one(".anisc-detail h3")
        or soup.select_one(".anisc-detail .film-name")
    )
    poster_img = soup.select_one(".film-poster img")
    synopsis = _text(soup.select_one(".film-description .text"))

    metadata: Dict[str, str] = {}
    genres: List[str] = []
    for item in soup.select(".anisc-info .item"):
        label = _metadata_label(item)
        if not label:
            continue
        if label == "genres":
            genres = [_text(a) for a in item.select("a") if _text(a)]
        value = _text(item.select_one(".name")) or _text(item)
        metadata[label] = value

    episode_list = extract_episode_list(soup)

    return {
        "title": title,
        "poster": _attr(poster_img, "src") or _attr(poster_img, "data-src"),
        "synopsis": synopsis,
        "year": metadata.get("aired", ""),
        "status": metadata.get("status", ""),
        "episodes": metadata.get("episodes") or str(len(episode_list)),
        "rating": metadata.get("mal score", ""),
        "genres": genres,
        "episodeList": episode_list,
    }


def extract_genres(html: Markup) -> List[Dict[str, str]]:
    soup = _soup(html)
    return [
        {"name": _text(a), "url": _attr(a, "href")}
        for a in soup.select(".genre-list a")
    ]


def extract_calendar(html: Markup) -> Dict[str, List[Dict[str, Any]]]:
    """
    Weekday skeleton for the schedule page.

    The schedule is not parsed yet: every weekday maps to an empty list,
    which means "not populated" rather than "nothing airs".
    """
    return {day: [] for day in WEEKDAYS}


def extract_episode_sources(text: str) -> Dict[str, List[Dict[str, str]]]:
    """
    Build the playable sources for an episode from the sources endpoint

    Only the single ``link`` field is used; quality, type and the English
    subtitle track are fixed placeholders.

    Raises:
        ParseError: if the payload is not a JSON object
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise ParseError(f"Invalid episode sources payload: {exc}") from exc
    if not isinstance(data, dict):
        raise ParseError(f"Episode sources payload is {type(data).__name__}, expected object")

    return {
        "sources": [
            {
                "url": data.get("link") or "",
                "quality": "1080p",
                "type": "mp4",
            }
        ],
        "subtitles": [
            {
                "url": "",
                "language": "en",
                "label": "English",
            }
        ],
    }
