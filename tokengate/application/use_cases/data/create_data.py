# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from tokengate.domain.data.entities import DataRecord, NewDataRecord
from tokengate.domain.data.repositories import DataRepository
from tokengate.shared.logging import logger


class CreateDataUseCase:
    def __init__(self, *, records: DataRepository) -> None:
        self._records = records

    def execute(self, name: str, city: str, country: str, *, created_by: int | None = None) -> DataRecord:
        record = self._records.create(NewDataRecord(name=name, city=city, country=country))
        logger.info(f"data.create: id={record.id} by user_id={created_by}")
        return record
