# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from tokengate.domain.data.entities import DataRecord, NewDataRecord
from tokengate.domain.data.repositories import DataRepository
from tokengate.infrastructure.db.models import Data
from tokengate.infrastructure.db.session import session_scope


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def _to_domain(row: Data) -> DataRecord:
    return DataRecord(
        id=row.id,
        name=row.name,
        city=row.city,
        country=row.country,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


class SqlAlchemyDataRepository(DataRepository):
    def list_all(self) -> Sequence[DataRecord]:
        with session_scope() as session:
            rows = session.query(Data).order_by(Data.id).all()
            return [_to_domain(row) for row in rows]

    def create(self, record: NewDataRecord) -> DataRecord:
        with session_scope() as session:
            row = Data(name=record.name, city=record.city, country=record.country)
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)
