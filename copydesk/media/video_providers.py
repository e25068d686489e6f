"""Video URL recognition for YouTube, Vimeo and direct CDN files.

Pure string handling: provider metadata lookups (oEmbed) happen outside this package
and only their results end up in VideoBlock fields.
"""

import re
from enum import StrEnum, auto

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class VideoProvider(StrEnum):
    YOUTUBE = auto()
    VIMEO = auto()
    CDN = auto()


ALLOWED_VIDEO_PROVIDERS = tuple(VideoProvider)


YOUTUBE_PATTERNS = [
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/watch\?v=([a-zA-Z0-9_-]{11})"),
    re.compile(r"(?:https?://)?youtu\.be/([a-zA-Z0-9_-]{11})"),
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/embed/([a-zA-Z0-9_-]{11})"),
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/shorts/([a-zA-Z0-9_-]{11})"),
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/watch\?.*v=([a-zA-Z0-9_-]{11})"),
]

VIMEO_PATTERNS = [
    re.compile(r"(?:https?://)?(?:www\.)?vimeo\.com/(\d+)"),
    re.compile(r"(?:https?://)?player\.vimeo\.com/video/(\d+)"),
]

CDN_PATTERNS = [
    re.compile(r"^https?://.+\.(mp4|webm|m3u8)(\?.*)?$", re.IGNORECASE),
]

_DISPLAY_NAMES = {
    VideoProvider.YOUTUBE: "YouTube",
    VideoProvider.VIMEO: "Vimeo",
    VideoProvider.CDN: "Direct video",
}


class VideoUrlInfo(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    valid: bool
    provider: VideoProvider | None = None
    video_id: str | None = None
    embed_url: str | None = None
    error: str | None = None


def parse_video_url(url: str | None) -> VideoUrlInfo:
    """Detect the provider of a video URL and extract its ID."""
    if url is None:
        return VideoUrlInfo(valid=False, error="Video URL is required")

    url = url.strip()
    if not url:
        return VideoUrlInfo(valid=False, error="Video URL cannot be empty")

    for pattern in YOUTUBE_PATTERNS:
        if match := pattern.search(url):
            return _recognized(VideoProvider.YOUTUBE, match.group(1))

    for pattern in VIMEO_PATTERNS:
        if match := pattern.search(url):
            return _recognized(VideoProvider.VIMEO, match.group(1))

    # For CDN files the full URL is the ID
    for pattern in CDN_PATTERNS:
        if pattern.search(url):
            return _recognized(VideoProvider.CDN, url)

    return VideoUrlInfo(
        valid=False,
        error="Unsupported video URL. Please use YouTube, Vimeo, or a direct video link (.mp4, .webm)",
    )


def _recognized(provider: VideoProvider, video_id: str) -> VideoUrlInfo:
    return VideoUrlInfo(
        valid=True,
        provider=provider,
        video_id=video_id,
        embed_url=generate_embed_url(provider, video_id),
    )


def generate_embed_url(provider: str, video_id: str) -> str:
    match provider:
        case VideoProvider.YOUTUBE:
            return f"https://www.youtube.com/embed/{video_id}"
        case VideoProvider.VIMEO:
            return f"https://player.vimeo.com/video/{video_id}"
        case VideoProvider.CDN:
            return video_id
        case _:
            return ""


def generate_poster_url(provider: str, video_id: str) -> str:
    """Default poster for a video, empty when the provider has no predictable thumbnail.

    Vimeo thumbnails need an oEmbed lookup and CDN files need an uploaded poster.
    """
    if provider == VideoProvider.YOUTUBE:
        return f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"
    return ""


def youtube_thumbnail_urls(video_id: str) -> dict[str, str]:
    """All YouTube thumbnail qualities, best first."""
    qualities = ["maxresdefault", "sddefault", "hqdefault", "mqdefault", "default"]
    return {quality: f"https://img.youtube.com/vi/{video_id}/{quality}.jpg" for quality in qualities}


def is_valid_video_url(url: str | None) -> bool:
    return parse_video_url(url).valid


def is_supported_provider(provider: str | None) -> bool:
    return provider in ALLOWED_VIDEO_PROVIDERS


def provider_display_name(provider: VideoProvider) -> str:
    return _DISPLAY_NAMES[provider]
