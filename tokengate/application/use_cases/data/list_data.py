# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from tokengate.domain.data.entities import DataRecord
from tokengate.domain.data.repositories import DataRepository


class ListDataUseCase:
    def __init__(self, *, records: DataRepository) -> None:
        self._records = records

    def execute(self) -> Sequence[DataRecord]:
        return self._records.list_all()
