from typing import List
from pydantic import BaseModel


"""Pydantic schemas for response models. - schemas"""


class Status(BaseModel):
    """Liveness probe payload. - status"""
    ok: bool
    message: str


class SchoolCreated(BaseModel):
    """A newly stored school with its assigned id. - school_created"""
    id: int
    name: str
    address: str
    latitude: float
    longitude: float


class SchoolDistance(BaseModel):
    """Single listing item with computed distance. - school_distance"""
    id: int
    name: str
    address: str
    latitude: float
    longitude: float
    # Great-circle distance from the query point, rounded to 3 decimals
    distance_km: float


class SchoolList(BaseModel):
    """Listing response, nearest school first. - school_list"""
    count: int
    schools: List[SchoolDistance]


# --- Error payloads ---


class ErrorDetail(BaseModel):
    """One failing validation rule. - error_detail"""
    field: str
    msg: str


class ValidationErrorResponse(BaseModel):
    """Body returned with status 400. - validation_error_response"""
    error: str
    details: List[ErrorDetail]


class ErrorResponse(BaseModel):
    """Body returned for 404 and 500 responses. - error_response"""
    error: str
