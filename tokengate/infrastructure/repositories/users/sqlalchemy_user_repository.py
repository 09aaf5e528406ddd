# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from tokengate.domain.users.entities import UserRecord
from tokengate.domain.users.exceptions import UserAlreadyExistsError
from tokengate.domain.users.repositories import UserRepository
from tokengate.infrastructure.db.models import User
from tokengate.infrastructure.db.session import session_scope


def _to_domain(row: User) -> UserRecord:
    return UserRecord(id=row.id, email=row.email, password_hash=row.password_hash)


class SqlAlchemyUserRepository(UserRepository):
    def find_by_email(self, email: str) -> UserRecord | None:
        with session_scope() as session:
            row = session.query(User).filter(User.email == email).first()
            if not row:
                return None
            return _to_domain(row)

    def add(self, email: str, password_hash: str) -> UserRecord:
        try:
            with session_scope() as session:
                row = User(email=email, password_hash=password_hash)
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            raise UserAlreadyExistsError(context={"email": email}) from exc
