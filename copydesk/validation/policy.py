"""Media placement policy.

Two placement policies exist for articles. The strict one requires every media
block to sit between text blocks (not first, not last, never next to another
media block). The relaxed one only checks counts and fields. Everything that
judges placement (publish validation, drag-and-drop order checks, the insertion
guard) reads PLACEMENT_POLICY so the editor and the publish endpoint never
disagree.
"""

from pydantic import BaseModel, ConfigDict


class MediaPlacementPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    require_text_boundaries: bool  # media may not open or close the article
    forbid_consecutive_media: bool  # every media block needs text directly before and after


STRICT_PLACEMENT = MediaPlacementPolicy(
    name="strict",
    require_text_boundaries=True,
    forbid_consecutive_media=True,
)

RELAXED_PLACEMENT = MediaPlacementPolicy(
    name="relaxed",
    require_text_boundaries=False,
    forbid_consecutive_media=False,
)

PLACEMENT_POLICY = STRICT_PLACEMENT
