"""Shared validation utilities"""

import re
from typing import Optional

from fastapi import HTTPException, Request

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
PHONE_E164_PATTERN = re.compile(r"^\+1\d{10}$")


def is_valid_uuid(value: Optional[str]) -> bool:
    """Validate canonical 8-4-4-4-12 UUID format"""
    return bool(value) and bool(UUID_PATTERN.match(value))


def valid_uuid(param_name: str = "id"):
    """
    Create a dependency rejecting malformed UUID path parameters with a 400

    Example usage:
        @router.get("/{id}", dependencies=[Depends(valid_uuid("id"))])
    """

    def dependency(request: Request):
        value = request.path_params.get(param_name)
        if not is_valid_uuid(value):
            raise HTTPException(
                status_code=400, detail=f"Invalid UUID format for parameter '{param_name}'"
            )

    return dependency


def validate_phone_e164(phone: Optional[str]) -> Optional[str]:
    """
    Validate a North American number in E.164 format (+1XXXXXXXXXX).

    Raises:
        ValueError: If phone number is invalid
    """
    if phone is None:
        return phone
    if not PHONE_E164_PATTERN.match(phone):
        raise ValueError("Must be a valid +1 E.164 phone")
    return phone


def validate_uuid_field(value: Optional[str]) -> Optional[str]:
    """field_validator helper for UUID-valued body fields"""
    if value is None:
        return value
    if not is_valid_uuid(value):
        raise ValueError("Must be a valid UUID")
    return value
