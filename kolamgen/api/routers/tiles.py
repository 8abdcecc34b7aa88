"""Tile catalog endpoints."""

from fastapi import APIRouter, HTTPException

from ...services.compatibility_service import get_rules
from ..schemas import ErrorResponse, TileInfo

router = APIRouter()


@router.get("", response_model=list[TileInfo])
async def list_tiles():
    """List the tile catalog with mirror images and compatible followers."""
    rules = get_rules()
    return [TileInfo.from_tile(tile, rules) for tile in rules.catalog]


@router.get("/{tile_id}", response_model=TileInfo, responses={404: {"model": ErrorResponse}})
async def get_tile(tile_id: int):
    """Get a single tile."""
    rules = get_rules()
    if tile_id not in rules.catalog.ids:
        raise HTTPException(status_code=404, detail=f"Tile {tile_id} not found")
    return TileInfo.from_tile(rules.catalog[tile_id], rules)
