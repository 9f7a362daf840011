"""
HTTP client for the reconciliation back end.

Speaks the JSON contract of the /reconciliations endpoints.
Every transport error, every non-2xx answer and every body
that cannot be read is logged once and raised as
ReconciliationServiceError; nothing is retried.
"""

import logging
from datetime import date
from typing import Any, Callable

import httpx
from pydantic import TypeAdapter

from estate_recon.config import get_settings
from estate_recon.console.session import ConsoleSession
from estate_recon.schemas.account import AccountResponse
from estate_recon.schemas.reconciliation import (
    ManualReconcileRequest,
    ReconciliationRows,
)

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"

AccountList = TypeAdapter(list[AccountResponse])


class ReconciliationServiceError(Exception):
    """A call to the reconciliation back end failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def _period_params(account_id: int, start_date: date, end_date: date) -> dict:
    return {
        "accountId": account_id,
        "startDate": start_date.strftime(DATE_FORMAT),
        "endDate": end_date.strftime(DATE_FORMAT),
    }


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return str(body)


def _decode(response: httpx.Response, parse: Callable[[Any], Any], what: str):
    """
    Parse a JSON body that the caller needs.

    Undecodable JSON and pydantic validation errors (both are
    ValueErrors) become a ReconciliationServiceError.
    """
    try:
        return parse(response.json())
    except ValueError as e:
        logger.error("Malformed %s from %s: %s", what, response.url, e)
        raise ReconciliationServiceError(
            f"Malformed {what}: {e}", response.status_code
        ) from e


def _matched_count(response: httpx.Response) -> int | None:
    """The `matched` count of an auto reconcile answer, when it carries one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    matched = body.get("matched")
    return matched if isinstance(matched, int) else None


class ReconciliationClient:
    """
    Async client used by the reconciliation view-model.

    The session is passed in explicitly; its bearer token is
    attached to every request made while it is signed in.
    """

    def __init__(
        self,
        session: ConsoleSession,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.session = session
        self._http = httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout if timeout is not None else settings.API_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def __aenter__(self) -> "ReconciliationClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = await self._http.request(
                method, url, headers=self.session.auth_headers(), **kwargs
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = _error_detail(e.response)
            logger.error(
                "%s %s failed with %s: %s",
                method, url, e.response.status_code, detail,
            )
            raise ReconciliationServiceError(detail, e.response.status_code) from e
        except httpx.RequestError as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise ReconciliationServiceError(str(e)) from e
        return response

    async def login(self, username: str, password: str) -> ConsoleSession:
        """Sign in and persist the resulting session."""
        response = await self._request(
            "POST", "/auth/login",
            json={"username": username, "password": password},
        )
        _decode(response, self.session.update, "login response")
        self.session.save()
        logger.info("Signed in as %s", self.session.state.username)
        return self.session

    async def list_accounts(self) -> list[AccountResponse]:
        response = await self._request("GET", "/accounts")
        return _decode(response, AccountList.validate_python, "account list")

    async def fetch_rows(
        self, account_id: int, start_date: date, end_date: date
    ) -> list:
        """All reconciliation rows of an account for a period."""
        response = await self._request(
            "GET", "/reconciliations",
            params=_period_params(account_id, start_date, end_date),
        )
        return _decode(
            response, ReconciliationRows.validate_python, "reconciliation rows"
        )

    async def auto_reconcile(
        self, account_id: int, start_date: date, end_date: date
    ) -> int | None:
        """
        Ask the back end to match the period.

        Returns the number of links created when the answer says
        so, otherwise None. Any 2xx answer counts as success.
        """
        response = await self._request(
            "GET", "/reconciliations/auto",
            params=_period_params(account_id, start_date, end_date),
        )
        return _matched_count(response)

    async def manual_reconcile(self, request: ManualReconcileRequest) -> None:
        await self._request(
            "POST", "/reconciliations/manual",
            json=request.model_dump(mode="json", by_alias=True, exclude_none=True),
        )

    async def unreconcile(self, link_id: int) -> None:
        await self._request("DELETE", f"/reconciliations/{link_id}")
