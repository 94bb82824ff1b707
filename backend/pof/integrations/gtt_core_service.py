"""
GTT core service client.

Thin read-only transport over the backend OData service: single entity,
one page of an entity set, or every page of an entity set. URIs are
service-relative ("/PurchaseOrderItem?$expand=...") and already encoded.
"""
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

import requests

from pof.core.settings import settings
from pof.exceptions import CoreServiceError
from pof.logging_config import get_logger
from pof.schemas.odata import ODataResultList

logger = get_logger(__name__)

M = TypeVar("M")

# Guards read_entity_set_all against a backend that keeps handing out __next
MAX_PAGES = 1000


class GTTCoreServiceClient:
    """Reads entities from the GTT core OData service."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.GTT_CORE_SERVICE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.GTT_REQUEST_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        token = token if token is not None else settings.GTT_CORE_SERVICE_TOKEN
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _url(self, uri: str) -> str:
        if uri.startswith(("http://", "https://")):
            return uri
        if not uri.startswith("/"):
            uri = "/" + uri
        return f"{self.base_url}{uri}"

    def _get(self, uri: str) -> Dict[str, Any]:
        url = self._url(uri)
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Core service unreachable: {e}", extra={"url": url})
            raise CoreServiceError(str(e), url=url) from e

        if not response.ok:
            try:
                body: Any = response.json()
            except ValueError:
                body = response.text
            logger.warning(
                "Core service returned %s", response.status_code,
                extra={"url": url, "status": response.status_code},
            )
            raise CoreServiceError(
                f"GET returned HTTP {response.status_code}",
                url=url,
                upstream_status=response.status_code,
                upstream_body=body,
            )
        return response.json()

    @staticmethod
    def _unwrap_entity_set(payload: Dict[str, Any]) -> Tuple[List[Dict[str, Any]], Optional[int], Optional[str]]:
        data = payload.get("d", payload)
        if isinstance(data, list):
            return data, None, None
        count = data.get("__count")
        return (
            data.get("results", []),
            int(count) if count is not None else None,
            data.get("__next"),
        )

    def read_entity(self, uri: str, model: Type[M]) -> M:
        """Read a single entity, e.g. "/PurchaseOrderItem(guid'...')"."""
        payload = self._get(uri)
        return model.model_validate(payload.get("d", payload))

    def read_entity_set(self, uri: str, model: Type[M]) -> ODataResultList[M]:
        """Read one page of an entity set."""
        results, count, next_link = self._unwrap_entity_set(self._get(uri))
        return ODataResultList[model](
            results=[model.model_validate(row) for row in results],
            count=count,
            next_link=next_link,
        )

    def read_entity_set_all(self, uri: str, model: Type[M]) -> ODataResultList[M]:
        """Read an entity set, following __next links until the last page."""
        page = self.read_entity_set(uri, model)
        count = page.count
        results = list(page.results)
        next_link = page.next_link
        pages = 1
        while next_link:
            if pages >= MAX_PAGES:
                raise CoreServiceError(
                    f"Gave up after {MAX_PAGES} pages", url=self._url(uri)
                )
            page = self.read_entity_set(next_link, model)
            results.extend(page.results)
            next_link = page.next_link
            pages += 1
        return ODataResultList[model](results=results, count=count)
