# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .data.entities import DataRecord, NewDataRecord
from .users.entities import TokenClaims, UserRecord

__all__ = ["DataRecord", "NewDataRecord", "TokenClaims", "UserRecord"]
