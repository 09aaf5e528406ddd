# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from tokengate.application.services.password_hashing import BcryptPasswordHasher
from tokengate.application.services.tokens import TokenService
from tokengate.application.use_cases.data.create_data import CreateDataUseCase
from tokengate.application.use_cases.data.list_data import ListDataUseCase
from tokengate.application.use_cases.users.login_user import LoginUserUseCase
from tokengate.infrastructure.auth.rate_limiter import FixedWindowRateLimiter
from tokengate.infrastructure.repositories.data.sqlalchemy_data_repository import \
    SqlAlchemyDataRepository
from tokengate.infrastructure.repositories.users.sqlalchemy_user_repository import \
    SqlAlchemyUserRepository
from tokengate.interfaces.http.controllers.auth_controller import AuthController
from tokengate.interfaces.http.controllers.data_controller import DataController
from tokengate.interfaces.http.middleware.bearer_auth import BearerAuth
from tokengate.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or load_config()

    @property
    def config(self) -> AppConfig:
        return self._config

    @cached_property
    def password_hasher(self) -> BcryptPasswordHasher:
        return BcryptPasswordHasher(rounds=self._config.password.bcrypt_rounds)

    @cached_property
    def token_service(self) -> TokenService:
        return TokenService(
            self._config.auth.jwt_secret,
            ttl=timedelta(seconds=self._config.auth.token_ttl_seconds),
        )

    @cached_property
    def login_rate_limiter(self) -> FixedWindowRateLimiter:
        return FixedWindowRateLimiter(
            limit=self._config.security.login_rate_limit_max,
            window_seconds=self._config.security.login_rate_limit_window,
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository()

    @cached_property
    def data_repository(self) -> SqlAlchemyDataRepository:
        return SqlAlchemyDataRepository()

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            tokens=self.token_service,
            rate_limiter=self.login_rate_limiter,
        )

    @cached_property
    def list_data_use_case(self) -> ListDataUseCase:
        return ListDataUseCase(records=self.data_repository)

    @cached_property
    def create_data_use_case(self) -> CreateDataUseCase:
        return CreateDataUseCase(records=self.data_repository)

    @cached_property
    def bearer_auth(self) -> BearerAuth:
        return BearerAuth(self.token_service)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            login_use_case=self.login_user_use_case,
            trust_proxy=self._config.security.trust_proxy,
        )

    @cached_property
    def data_controller(self) -> DataController:
        return DataController(
            list_use_case=self.list_data_use_case,
            create_use_case=self.create_data_use_case,
            auth=self.bearer_auth,
        )
