# ui/api.py
import os
import logging
from typing import List, Optional

import httpx
from dotenv import load_dotenv
from pydantic import ValidationError as PydanticValidationError

from errors import NotFoundError, RemoteError, ValidationError
from models.student import Student
from models.user import User

logger = logging.getLogger(__name__)

load_dotenv()
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "10"))


class StudentRecordsApi:
    """Async client for the student records service.

    Validation and not-found failures come back as ``ValidationError`` and
    ``NotFoundError``; everything else (storage failures, unexpected server
    responses, timeouts, network errors) is raised as ``RemoteError``.
    Nothing is retried.
    """

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    @classmethod
    def from_env(cls) -> "StudentRecordsApi":
        return cls(httpx.AsyncClient(base_url=API_BASE_URL, timeout=API_TIMEOUT))

    async def aclose(self):
        await self.http.aclose()

    async def get_all_students(self, sort_by: Optional[str] = None, descending: bool = False) -> List[Student]:
        params = {}
        if sort_by:
            params["sortBy"] = sort_by
            params["order"] = "desc" if descending else "asc"
        data = await self._request("GET", "/api/students/", params=params)
        return self._parse_list(Student, data)

    async def get_student(self, id: str) -> Student:
        return self._parse(Student, await self._request("GET", f"/api/students/{id}"))

    async def create_student(self, values: dict) -> Student:
        return self._parse(Student, await self._request("POST", "/api/students/", json=values))

    async def update_student(self, id: str, values: dict) -> Student:
        return self._parse(Student, await self._request("PUT", f"/api/students/{id}", json=values))

    async def delete_student(self, id: str) -> None:
        await self._request("DELETE", f"/api/students/{id}")

    async def get_all_users(self) -> List[User]:
        data = await self._request("GET", "/api/users/")
        return self._parse_list(User, data)

    async def _request(self, method: str, url: str, **kwargs):
        try:
            response = await self.http.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"{method} {url} timed out: {str(e)}")
            raise RemoteError(f"Request timed out: {method} {url}")
        except httpx.RequestError as e:
            logger.error(f"{method} {url} failed: {str(e)}")
            raise RemoteError(f"Request failed: {str(e) or type(e).__name__}")

        if response.is_error:
            raise self._error_from(response)
        try:
            return response.json()
        except ValueError:
            raise RemoteError(f"Invalid response from server: {response.text[:100]}", status_code=response.status_code)

    def _parse(self, model, data):
        try:
            return model.model_validate(data)
        except (PydanticValidationError, TypeError) as e:
            logger.error(f"Unexpected {model.__name__} payload: {str(e)[:200]}")
            raise RemoteError(f"Invalid response from server: malformed {model.__name__}")

    def _parse_list(self, model, data):
        if not isinstance(data, list):
            logger.error(f"Expected a list of {model.__name__}, got {type(data).__name__}")
            raise RemoteError(f"Invalid response from server: expected a list of {model.__name__}")
        return [self._parse(model, item) for item in data]

    def _error_from(self, response: httpx.Response):
        try:
            body = response.json()
        except ValueError:
            body = None
        detail = body.get("detail") if isinstance(body, dict) else None

        if isinstance(detail, dict):
            kind = detail.get("kind")
            message = detail.get("detail") or response.reason_phrase
            if kind == "validation":
                return ValidationError(detail.get("errors", []), message)
            if kind == "not_found":
                return NotFoundError(message)
            if kind == "storage":
                return RemoteError(message, kind="storage", status_code=response.status_code)
        elif isinstance(detail, list) and response.status_code == 422:
            # Request rejected by the framework before reaching the gateway
            errors = [
                {"field": ".".join(str(p) for p in e.get("loc", [])[1:]) or "body", "message": e.get("msg", "")}
                for e in detail
            ]
            return ValidationError(errors)

        logger.error(f"Unexpected {response.status_code} response: {response.text[:200]}")
        return RemoteError(
            f"Server error {response.status_code}: {response.reason_phrase}",
            status_code=response.status_code,
        )
