from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from app.application.exceptions import BookingNotFoundError, BookingStoreError


class AppwriteDatabaseClient:
    """Minimal REST client for one Appwrite database collection."""

    def __init__(
        self,
        endpoint: str,
        project_id: str,
        api_key: str,
        database_id: str,
        collection_id: str,
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._documents_url = (
            f"{endpoint.rstrip('/')}/databases/{database_id}/collections/{collection_id}/documents"
        )
        self._headers = {
            "X-Appwrite-Project": project_id,
            "X-Appwrite-Key": api_key,
            "Content-Type": "application/json",
        }
        self._client = http_client or httpx.Client(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def create_document(self, data: dict[str, Any]) -> dict[str, Any]:
        payload = {"documentId": "unique()", "data": data}
        return self._request("POST", self._documents_url, json=payload)

    def get_document(self, document_id: str) -> dict[str, Any]:
        return self._request("GET", f"{self._documents_url}/{document_id}", document_id=document_id)

    def list_documents(self, queries: list[dict[str, Any]] | None = None) -> list[dict[str, Any]]:
        params = [("queries[]", json.dumps(q)) for q in queries or []]
        data = self._request("GET", self._documents_url, params=params)
        return list(data.get("documents", []))

    def update_document(self, document_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._request(
            "PATCH",
            f"{self._documents_url}/{document_id}",
            json={"data": data},
            document_id=document_id,
        )

    def delete_document(self, document_id: str) -> None:
        self._request("DELETE", f"{self._documents_url}/{document_id}", document_id=document_id)

    def _request(
        self,
        method: str,
        url: str,
        document_id: str | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        try:
            resp = self._client.request(method, url, headers=self._headers, **kwargs)
        except httpx.HTTPError as e:
            self._logger.error("Appwrite request failed", extra={"method": method, "reason": str(e)})
            raise BookingStoreError(f"Booking store unreachable: {e}") from e

        if resp.status_code == 404 and document_id is not None:
            raise BookingNotFoundError(document_id)

        if resp.status_code >= 400:
            try:
                error_message = resp.json().get("message") or resp.text
            except ValueError:
                error_message = resp.text

            self._logger.error(
                "Appwrite request rejected",
                extra={
                    "method": method,
                    "status": resp.status_code,
                    "reason": error_message,
                },
            )
            raise BookingStoreError(error_message or f"Booking store returned HTTP {resp.status_code}")

        if resp.status_code == 204 or not resp.content:
            return {}
        return resp.json()


def equal(attribute: str, value: Any) -> dict[str, Any]:
    return {"method": "equal", "attribute": attribute, "values": [value]}


def order_desc(attribute: str) -> dict[str, Any]:
    return {"method": "orderDesc", "attribute": attribute}
