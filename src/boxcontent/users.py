"""Users API client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ._http.iter_coroutine import iter_coroutine
from .errors import require_not_none
from .models import Account, AccountList

if TYPE_CHECKING:
    from ._core.dispatcher import RequestDispatcher


class BaseUsersClient:
    """Base users client with shared async business logic."""

    def __init__(self, dispatcher: RequestDispatcher, *, access_token: str | None = None):
        self._dispatcher = dispatcher
        self._access_token = access_token

    async def _post(self, endpoint: str, params: dict[str, Any]) -> Any:
        response = await self._dispatcher.post_to_api(
            endpoint, params, access_token=self._access_token
        )
        return response.decoded_body

    async def _get_current_account(self) -> Account:
        body = await self._post("/users/get_current_account", {})
        return Account.model_validate(body or {})

    async def _get_account(self, account_id: str | None) -> Account:
        require_not_none(account_id=account_id)
        body = await self._post("/users/get_account", {"account_id": account_id})
        return Account.model_validate(body or {})

    async def _get_accounts(self, account_ids: list[str] | None = None) -> AccountList:
        body = await self._post("/users/get_account_batch", {"account_ids": list(account_ids or [])})
        return AccountList.from_response(body)

    async def _get_space_usage(self) -> dict[str, Any]:
        body = await self._post("/users/get_space_usage", {})
        return body if isinstance(body, dict) else {}


class UsersClient(BaseUsersClient):
    def get_current_account(self) -> Account:
        return iter_coroutine(self._get_current_account())

    def get_account(self, account_id: str | None) -> Account:
        return iter_coroutine(self._get_account(account_id))

    def get_accounts(self, account_ids: list[str] | None = None) -> AccountList:
        return iter_coroutine(self._get_accounts(account_ids))

    def get_space_usage(self) -> dict[str, Any]:
        """Space usage of the current account, as returned by the API."""
        return iter_coroutine(self._get_space_usage())


class AsyncUsersClient(BaseUsersClient):
    async def get_current_account(self) -> Account:
        return await self._get_current_account()

    async def get_account(self, account_id: str | None) -> Account:
        return await self._get_account(account_id)

    async def get_accounts(self, account_ids: list[str] | None = None) -> AccountList:
        return await self._get_accounts(account_ids)

    async def get_space_usage(self) -> dict[str, Any]:
        return await self._get_space_usage()


__all__ = ["BaseUsersClient", "UsersClient", "AsyncUsersClient"]
