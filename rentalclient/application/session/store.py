# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""The single source of truth for who is logged in.

State is an immutable ``SessionState`` snapshot replaced on every change and
pushed to subscribers. Operations are not serialized: two overlapping calls
interleave at their await points and whichever finishes last decides the
final state.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from rentalclient.application.interfaces import (
    AuthApiPort,
    CredentialStorePort,
    SessionListener,
)
from rentalclient.domain import (
    ChangePasswordRequest,
    LoginRequest,
    NoActiveSessionError,
    ProfileUpdate,
    RegisterRequest,
    SessionOperation,
    SessionState,
    UserProfile,
)
from rentalclient.infrastructure.storage import StorageError
from rentalclient.shared.errors import ApiError, ServerRespondedError, coerce_model
from rentalclient.shared.errors.base import UNKNOWN_ERROR_MESSAGE
from rentalclient.shared.logging import logger

INITIALIZE_FAILED_MESSAGE = "Failed to initialize authentication"


def _error_message(exc: BaseException) -> str:
    message = getattr(exc, "message", None) or str(exc)
    return message or UNKNOWN_ERROR_MESSAGE


class SessionStore:

    def __init__(self, *, api: AuthApiPort, credentials: CredentialStorePort) -> None:
        self._api = api
        self._credentials = credentials
        self._state = SessionState()
        self._listeners: list[SessionListener] = []

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _replace(self, state: SessionState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception(f"SessionStore: listener failed phase={state.phase.value}")

    def _set(self, **changes: Any) -> None:
        self._replace(self._state.evolve(**changes))

    def _begin(self, operation: SessionOperation) -> None:
        self._set(is_loading=True, last_error=None, operation=operation)

    async def _session_revoked(self) -> bool:
        try:
            return await self._credentials.load_token() is None
        except StorageError as exc:
            logger.warning(f"SessionStore: cannot inspect stored token code={exc.error_code}")
            return False

    def _require_live_session(self, operation: SessionOperation) -> None:
        # a logout that finished meanwhile wins; its result must not revive the user
        if not self._state.is_authenticated:
            logger.warning(f"SessionStore: {operation.value} finished after the session ended, result dropped")
            raise NoActiveSessionError()

    async def _record_failure(self, operation: SessionOperation, exc: BaseException) -> None:
        message = _error_message(exc)
        logger.warning(
            f"SessionStore: {operation.value} failed "
            f"error={type(exc).__name__} message={message}"
        )
        if (
            isinstance(exc, ServerRespondedError)
            and exc.is_unauthorized
            and self._state.is_authenticated
            and await self._session_revoked()
        ):
            logger.warning("SessionStore: stored credential was invalidated, session dropped")
            self._replace(SessionState.anonymous(last_error=message))
            return
        self._set(is_loading=False, last_error=message, operation=None)

    async def initialize(self) -> SessionState:
        """Rehydrate the session from storage and confirm it with the backend.

        Always settles in a non-busy anonymous or authenticated state. A
        rejected liveness check is routine expiry and leaves no error behind.
        """

        self._set(is_loading=True, operation=SessionOperation.INITIALIZE)
        try:
            token = await self._credentials.load_token()
            stored_user = await self._credentials.load_user()

            if token is None and stored_user is None:
                logger.debug("SessionStore: no stored session")
                self._replace(SessionState.anonymous())
                return self._state

            if token is None or stored_user is None:
                logger.warning("SessionStore: incomplete stored session, clearing")
                await self._credentials.clear()
                self._replace(SessionState.anonymous())
                return self._state

            self._set(user=stored_user, is_authenticated=True)
            try:
                current_user = await self._api.get_current_user()
            except ApiError as exc:
                logger.info(f"SessionStore: stored session rejected code={exc.code}")
                await self._credentials.clear()
                self._replace(SessionState.anonymous())
                return self._state

            if not self._state.is_authenticated:
                logger.info("SessionStore: session ended while restoring, keeping it ended")
                return self._state

            await self._credentials.save_user(current_user)
            self._replace(
                SessionState(user=current_user, is_authenticated=True, initialized=True)
            )
            logger.info(f"SessionStore: session restored user_id={current_user.id}")
        except Exception:
            logger.exception("SessionStore: initialization failed")
            self._replace(SessionState.anonymous(last_error=INITIALIZE_FAILED_MESSAGE))
        return self._state

    async def login(self, credentials: LoginRequest | Mapping[str, Any]) -> UserProfile:
        payload = coerce_model(LoginRequest, credentials)
        self._begin(SessionOperation.LOGIN)
        try:
            response = await self._api.login(payload)
            await self._credentials.save(response.credential, response.user)
        except Exception as exc:
            logger.warning(f"SessionStore: login failed username={payload.username}")
            self._replace(
                SessionState.anonymous(last_error=_error_message(exc))
            )
            raise

        self._replace(
            SessionState(user=response.user, is_authenticated=True, initialized=True)
        )
        logger.info(f"SessionStore: login ok user_id={response.user.id}")
        return response.user

    async def register(self, user_data: RegisterRequest | Mapping[str, Any]) -> UserProfile:
        payload = coerce_model(RegisterRequest, user_data)
        self._begin(SessionOperation.REGISTER)
        try:
            created = await self._api.register(payload)
        except Exception as exc:
            await self._record_failure(SessionOperation.REGISTER, exc)
            raise

        logger.info(f"SessionStore: account created user_id={created.id}")
        return await self.login(payload.to_login())

    async def logout(self) -> None:
        self._set(is_loading=True, operation=SessionOperation.LOGOUT)
        try:
            await self._api.logout()
        except Exception as exc:
            # local teardown must happen whatever the backend says
            logger.warning(f"SessionStore: remote logout failed error={type(exc).__name__}")
        finally:
            try:
                await self._credentials.clear()
            finally:
                self._replace(SessionState.anonymous())
        logger.info("SessionStore: logged out")

    def clear_error(self) -> None:
        self._set(last_error=None)

    async def update_profile(self, changes: ProfileUpdate | Mapping[str, Any]) -> UserProfile:
        if self._state.user is None:
            raise NoActiveSessionError()

        payload = coerce_model(ProfileUpdate, changes)
        self._begin(SessionOperation.UPDATE_PROFILE)
        try:
            user = await self._api.update_profile(payload)
        except Exception as exc:
            await self._record_failure(SessionOperation.UPDATE_PROFILE, exc)
            raise

        self._require_live_session(SessionOperation.UPDATE_PROFILE)
        try:
            await self._credentials.save_user(user)
        except Exception as exc:
            await self._record_failure(SessionOperation.UPDATE_PROFILE, exc)
            raise

        self._set(user=user, is_loading=False, operation=None)
        logger.info(f"SessionStore: profile updated user_id={user.id}")
        return user

    async def change_password(self, old_password: str, new_password: str) -> None:
        payload = coerce_model(
            ChangePasswordRequest,
            {"old_password": old_password, "new_password": new_password},
        )
        self._begin(SessionOperation.CHANGE_PASSWORD)
        try:
            await self._api.change_password(payload)
        except Exception as exc:
            await self._record_failure(SessionOperation.CHANGE_PASSWORD, exc)
            raise

        self._set(is_loading=False, operation=None)
        logger.info("SessionStore: password changed")

    async def refresh_session(self) -> UserProfile:
        if self._state.user is None:
            raise NoActiveSessionError()

        self._begin(SessionOperation.REFRESH)
        try:
            token = await self._credentials.load_token()
            response = await self._api.refresh_token(token)
        except Exception as exc:
            await self._record_failure(SessionOperation.REFRESH, exc)
            raise

        self._require_live_session(SessionOperation.REFRESH)
        try:
            await self._credentials.save(response.credential, response.user)
        except Exception as exc:
            await self._record_failure(SessionOperation.REFRESH, exc)
            raise

        self._set(user=response.user, is_authenticated=True, is_loading=False, operation=None)
        logger.info(f"SessionStore: session refreshed user_id={response.user.id}")
        return response.user


__all__ = ["INITIALIZE_FAILED_MESSAGE", "SessionStore"]
