from typing import Annotated

from fastapi import Depends

from copydesk.gateway.config import Settings, get_settings
from copydesk.gateway.exceptions import BodyTooLargeError

SettingsDep = Annotated[Settings, Depends(get_settings)]


def ensure_body_size(body: str, settings: Settings) -> str:
    """Reject bodies the scanner should not see."""
    if len(body) > settings.max_body_chars:
        raise BodyTooLargeError(len(body), settings.max_body_chars)
    return body
