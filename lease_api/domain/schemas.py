"""Request bodies accepted by the HTTP routes.

Fields are optional on purpose: blank/missing values are reported by the
services with their own validation messages. The role stays a plain string so
the user service can default it and match it case-insensitively.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None


class CarRequest(BaseModel):
    model: Optional[str] = None


class LeaseRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    car_id: Optional[int] = Field(default=None, alias="carId")
