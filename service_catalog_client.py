"""Service Catalog API client.

This module defines a small client wrapper around the Service Catalog
REST API.  It uses the ``requests`` library internally and exposes one
method per catalog operation:

* :meth:`list_services` – return one page of entries plus paging info.
* :meth:`list_all_services` – walk every page and return all entries.
* :meth:`get_service` – fetch a single entry by its identifier.
* :meth:`create_service` – register a new entry.
* :meth:`update_service` – replace name, description and/or versions.
* :meth:`delete_service` – remove an entry.

Every method returns a ``(result, error)`` tuple.  On success ``error``
is ``None``; on failure ``result`` is empty and ``error`` is a
dictionary with ``status_code`` and ``message`` keys, where
``message`` is the ``detail`` reported by the server.

The API requires authentication; pass ``api_key='<your token>'`` and
it will be sent as ``Authorization: Bearer <token>``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class ServiceCatalogAPI:
    """Client for interacting with the Service Catalog API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``https://catalog.example.com``.
            api_key: Optional bearer token included in every request.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/services``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module docstring.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

        if response.status_code >= 400:
            try:
                err_json = response.json()
                detail = err_json.get("detail") if isinstance(err_json, dict) else None
                message = detail or str(err_json)
            except ValueError:
                message = response.text
            logger.error("API request failed (%s): %s", response.status_code, message)
            return None, {"status_code": response.status_code, "message": message}
        if response.content:
            return response.json(), None
        return None, None

    @staticmethod
    def _service_path(service_id: str) -> str:
        # Ids are opaque; "/" or "?" must not change the route.
        return f"/services/{quote(service_id, safe='')}"

    # ------------------------------------------------------------------
    # Catalog operations
    # ------------------------------------------------------------------
    def list_services(
        self,
        *,
        page: int = 1,
        page_size: int = 10,
        sort_field: str = "created_at",
        sort_order: int = 1,
        search: str = "",
    ) -> Tuple[Dict[str, Any], Optional[Error]]:
        """Retrieve one page of catalog entries.

        Returns:
            A tuple ``(page, error)`` where ``page`` has the keys
            ``data``, ``page``, ``pageSize`` and ``total``.
        """
        params: Dict[str, Any] = {
            "page": page,
            "pageSize": page_size,
            "sortField": sort_field,
            "sortOrder": sort_order,
        }
        if search:
            params["search"] = search
        data, error = self._request("GET", "/services", params=params)
        if error or not isinstance(data, dict):
            return {"data": [], "page": page, "pageSize": page_size, "total": 0}, error
        return data, None

    def list_all_services(self, *, page_size: int = 50, **kwargs: Any) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Fetch every entry by walking the pages.

        Returns:
            A tuple ``(services, error)``.  On error the entries fetched
            so far are returned alongside the error.
        """
        services: List[Dict[str, Any]] = []
        page = 1
        while True:
            result, error = self.list_services(page=page, page_size=page_size, **kwargs)
            if error:
                return services, error
            services.extend(result["data"])
            if not result["data"] or len(services) >= result["total"]:
                return services, None
            page += 1

    def get_service(self, service_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve a single entry by ID."""
        return self._request("GET", self._service_path(service_id))

    def create_service(
        self, name: str, description: str = "", versions: Optional[List[str]] = None
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create an entry and return it with its assigned ``id``."""
        payload = {"name": name, "description": description, "versions": versions or []}
        return self._request("POST", "/services", json_body=payload)

    def update_service(self, service_id: str, **fields: Any) -> Tuple[bool, Optional[Error]]:
        """Update ``name``, ``description`` and/or ``versions`` of an entry.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("PUT", self._service_path(service_id), json_body=fields)
        return error is None, error

    def delete_service(self, service_id: str) -> Tuple[bool, Optional[Error]]:
        """Delete an entry.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", self._service_path(service_id))
        return error is None, error
