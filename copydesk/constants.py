"""Editorial limits shared by the parser, the validator and the gateway."""

# Images are a hard limit (publishing is blocked), videos a soft one (warning only)
MAX_IMAGES = 3
MAX_VIDEOS = 1

# Upload pre-checks; the binary processing itself lives outside this package
ALLOWED_IMAGE_FORMATS = (
    "image/jpeg",
    "image/png",
    "image/webp",
    "image/avif",
)
MAX_IMAGE_SIZE_BYTES = 5 * 1024 * 1024  # 5MB

# Article metadata limits
MAX_TITLE_CHARS = 200
MAX_SUBTITLE_CHARS = 500
