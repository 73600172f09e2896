from typing import Any, Dict, Optional
from fastapi import APIRouter, Body, Depends, Query, Request

from school_api.api import schemas
from school_api.api.validation import validate_point, validate_school
from school_api.services.distance import rank_by_distance
from school_api.services.store import SchoolStore


"""API routes for recording and listing schools. - api, routes"""

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": schemas.ValidationErrorResponse},
    500: {"model": schemas.ErrorResponse},
}


def get_store(request: Request) -> SchoolStore:
    """Wrap the process-wide pool created at startup. - get_store"""
    return SchoolStore(request.app.state.pool)


@router.post("/addSchool", status_code=201, response_model=schemas.SchoolCreated, responses=_ERROR_RESPONSES)
async def add_school(
    payload: Optional[Dict[str, Any]] = Body(None),
    store: SchoolStore = Depends(get_store),
):
    """Validate and store a school, returning it with its new id. - add_school"""
    school = validate_school(payload)
    row = await store.insert(school["name"], school["address"], school["latitude"], school["longitude"])
    return schemas.SchoolCreated(
        id=row["id"],
        name=school["name"],
        address=school["address"],
        latitude=school["latitude"],
        longitude=school["longitude"],
    )


@router.get("/listSchools", response_model=schemas.SchoolList, responses=_ERROR_RESPONSES)
async def list_schools(
    latitude: Optional[str] = Query(None),
    longitude: Optional[str] = Query(None),
    store: SchoolStore = Depends(get_store),
):
    """List every school ordered by distance from the query point. - list_schools

    Coordinates arrive as raw strings so that every rule is reported through
    the same validation path as addSchool.
    """
    lat, lon = validate_point({"latitude": latitude, "longitude": longitude})
    rows = await store.fetch_all()
    ranked = rank_by_distance(lat, lon, rows)
    return schemas.SchoolList(count=len(ranked), schools=ranked)
