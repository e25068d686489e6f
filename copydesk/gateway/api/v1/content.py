from typing import Literal

from fastapi import APIRouter
from loguru import logger

from copydesk.content import parse, serialize
from copydesk.content.models import ContentBlock, ParseResult, WireModel, reorder_blocks
from copydesk.gateway.deps import SettingsDep, ensure_body_size
from copydesk.validation import (
    InsertCheck,
    MediaValidationResult,
    can_insert_media_at,
    is_valid_block_order,
    validate_media_blocks,
)

router = APIRouter(prefix="/v1/content", tags=["Content"])


class ParseRequest(WireModel):
    """Body text as stored."""

    body: str


class BlocksRequest(WireModel):
    """A block list as held by the editor. ``order`` values are ignored and recomputed."""

    blocks: list[ContentBlock]


class SerializeResponse(WireModel):
    body: str


class InsertCheckRequest(WireModel):
    """Args:
    blocks: Current block list.
    position: Index the new block would take (0..len(blocks)).
    media_type: Kind of media block being inserted.
    """

    blocks: list[ContentBlock]
    position: int
    media_type: Literal["image", "video"]


@router.post("/parse", response_model=ParseResult)
async def parse_body(request: ParseRequest, settings: SettingsDep) -> ParseResult:
    body = ensure_body_size(request.body, settings)
    result = parse(body)
    if not result.success:
        logger.info(f"Body parsed with {len(result.errors)} errors ({len(result.blocks)} blocks kept)")
    return result


@router.post("/serialize", response_model=SerializeResponse)
async def serialize_blocks(request: BlocksRequest) -> SerializeResponse:
    return SerializeResponse(body=serialize(reorder_blocks(request.blocks)))


@router.post("/validate", response_model=MediaValidationResult)
async def validate_blocks(request: BlocksRequest) -> MediaValidationResult:
    return validate_media_blocks(reorder_blocks(request.blocks))


@router.post("/order-check", response_model=MediaValidationResult)
async def check_block_order(request: BlocksRequest) -> MediaValidationResult:
    return is_valid_block_order(reorder_blocks(request.blocks))


@router.post("/insert-check", response_model=InsertCheck)
async def check_media_insert(request: InsertCheckRequest) -> InsertCheck:
    return can_insert_media_at(request.blocks, request.position, request.media_type)
