# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import DataRecord, NewDataRecord


class DataRepository(Protocol):
    def list_all(self) -> Sequence[DataRecord]: ...
    def create(self, record: NewDataRecord) -> DataRecord: ...
