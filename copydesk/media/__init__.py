"""Media helpers that do not need network access or binary processing."""

from copydesk.media.video_providers import (
    ALLOWED_VIDEO_PROVIDERS,
    VideoProvider,
    VideoUrlInfo,
    generate_embed_url,
    generate_poster_url,
    is_supported_provider,
    is_valid_video_url,
    parse_video_url,
    provider_display_name,
    youtube_thumbnail_urls,
)

__all__ = [
    "VideoProvider",
    "ALLOWED_VIDEO_PROVIDERS",
    "VideoUrlInfo",
    "parse_video_url",
    "generate_embed_url",
    "generate_poster_url",
    "youtube_thumbnail_urls",
    "is_valid_video_url",
    "is_supported_provider",
    "provider_display_name",
]
