from fastapi import APIRouter
from pydantic import Field

from copydesk.content.models import WireModel
from copydesk.gateway.exceptions import UnsupportedVideoUrlError
from copydesk.media import VideoUrlInfo, generate_poster_url, parse_video_url
from copydesk.validation import MediaValidationResult, validate_image_file

router = APIRouter(prefix="/v1/media", tags=["Media"])


class VideoInfoRequest(WireModel):
    url: str


class VideoInfoResponse(VideoUrlInfo):
    """Recognized video plus the default poster (empty when the provider has none)."""

    poster_url: str = ""


class ImageCheckRequest(WireModel):
    """Declared properties of an upload, checked before the bytes are processed."""

    size: int = Field(ge=0)
    mime_type: str
    filename: str | None = None


@router.post("/video-info", response_model=VideoInfoResponse)
async def video_info(request: VideoInfoRequest) -> VideoInfoResponse:
    info = parse_video_url(request.url)
    if not info.valid:
        raise UnsupportedVideoUrlError(request.url, info.error or "Unsupported video URL")
    assert info.provider is not None and info.video_id is not None
    return VideoInfoResponse(
        **info.model_dump(),
        poster_url=generate_poster_url(info.provider, info.video_id),
    )


@router.post("/image-check", response_model=MediaValidationResult)
async def image_check(request: ImageCheckRequest) -> MediaValidationResult:
    return validate_image_file(request.size, request.mime_type, request.filename)
