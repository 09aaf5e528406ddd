from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tokengate.domain.data.entities import DataRecord


class CreateDataRequestDTO(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=255)
    country: str = Field(min_length=1, max_length=255)


class DataRecordDTO(BaseModel):
    id: int
    name: str
    city: str
    country: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_domain(cls, record: DataRecord) -> "DataRecordDTO":
        return cls(
            id=record.id,
            name=record.name,
            city=record.city,
            country=record.country,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
