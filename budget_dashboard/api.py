"""HTTP client for the remote budget API.

The API owns persistence and PDF rendering. This client wraps each endpoint
in one method, adds the bearer token from the session record, and turns any
transport or HTTP failure into :class:`ApiError`. Nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

from .config import API_BASE_URL, API_TIMEOUT
from .models import Budget, BudgetSummary, EmployeeFunction

logger = logging.getLogger(__name__)


class ApiError(RuntimeError):
    """A remote call failed. ``operation`` names the call for the user notice."""

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class BudgetApiClient:
    """Client for the budget, employee and PDF endpoints."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        token: Optional[str] = None,
        timeout: float = API_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'Content-Type': 'application/json'})
        if token:
            self.session.headers['Authorization'] = f"Bearer {token}"

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, operation: str, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = self._url(path)
        logger.debug("%s %s %s", operation, method, url)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("%s failed: %s", operation, exc)
            raise ApiError(operation, str(exc)) from exc
        return response

    def _json(self, operation: str, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            logger.error("%s returned invalid JSON: %s", operation, exc)
            raise ApiError(operation, "invalid JSON response") from exc

    def list_employee_functions(self) -> List[EmployeeFunction]:
        """Fetch the role catalog used to price line items."""
        response = self._request('list_employee_functions', 'GET', '/employee')
        records = self._json('list_employee_functions', response) or []
        return [EmployeeFunction.from_record(record) for record in records]

    def list_budgets(self) -> List[BudgetSummary]:
        response = self._request('list_budgets', 'GET', '/budget')
        records = self._json('list_budgets', response) or []
        return [BudgetSummary.from_record(record) for record in records]

    def get_budget(self, budget_id: int) -> Optional[Tuple[Budget, Dict[int, EmployeeFunction]]]:
        """Fetch one budget with its joined role data.

        Returns:
            ``(budget, functions)`` or ``None`` when the API has no such budget
        """
        response = self._request('get_budget', 'GET', '/budget/view', params={'id': budget_id})
        if not response.content:
            return None
        records = self._json('get_budget', response)
        if not records:
            return None
        record = records[0] if isinstance(records, list) else records
        return Budget.from_record(record)

    def create_budget(self, payload: Dict[str, Any]) -> None:
        self._request('create_budget', 'POST', '/budget', json=payload)
        logger.info(
            "Created budget for pipedrive code %s with %d line items",
            payload.get('pipedrive_code'),
            len(payload.get('budget_employee') or []),
        )

    def delete_budget(self, budget_id: int) -> None:
        self._request('delete_budget', 'DELETE', '/budget/view', params={'id': budget_id})
        logger.info("Deleted budget %s", budget_id)

    def generate_pdf(self, html: str) -> bytes:
        """Send an HTML document to the rendering service and return the PDF bytes."""
        response = self._request('generate_pdf', 'POST', '/generate/pdf', json={'html': html})
        return response.content
