"""Finder report schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class CreateReportRequest(BaseModel):
    phone_number: str = Field(default="", max_length=20)
    city: str = Field(default="", max_length=50)
    where: str = Field(default="", max_length=50)
    has_pet: bool = False
    additional: str = Field(default="", max_length=255)


class Report(BaseModel):
    id: int
    pet_id: int
    phone_number: str
    city: str
    where: str
    has_pet: bool
    additional: str
    created_at: datetime
