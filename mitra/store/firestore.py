"""Firestore adapter: city reference data plus per-user messages and favorites.

Talks to the Firestore v1 REST API through googleapiclient with a service
account, the same way the other Google adapters in this project do. Owner-scoped
collections live under ``users/{owner}/{collection}``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from mitra.store.base import Collection, Document, StoreError, check_owner

logger = logging.getLogger(__name__)

_FIRESTORE_SCOPES = ["https://www.googleapis.com/auth/datastore"]
_PAGE_SIZE = 300


def _get_credentials(credentials_path: str):
    if not credentials_path or not Path(credentials_path).exists():
        return None
    from google.oauth2 import service_account
    return service_account.Credentials.from_service_account_file(
        credentials_path, scopes=_FIRESTORE_SCOPES
    )


# Value codec --------------------------------------------------------------


def encode_value(value: Any) -> Dict[str, Any]:
    """Encode a Python value as a Firestore typed ``Value``."""
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, datetime):
        return {"timestampValue": value.isoformat()}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(v) for v in value]}}
    if isinstance(value, dict):
        return {"mapValue": {"fields": encode_fields(value)}}
    raise TypeError(f"Cannot store value of type {type(value).__name__} in Firestore")


def encode_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    return {str(k): encode_value(v) for k, v in data.items()}


def decode_value(value: Dict[str, Any]) -> Any:
    """Decode a Firestore typed ``Value`` into a plain Python value."""
    if "nullValue" in value:
        return None
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "stringValue" in value:
        return value["stringValue"]
    if "timestampValue" in value:
        return value["timestampValue"]
    if "arrayValue" in value:
        return [decode_value(v) for v in value["arrayValue"].get("values") or []]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields") or {})
    if "referenceValue" in value:
        return value["referenceValue"]
    if "geoPointValue" in value:
        point = value["geoPointValue"]
        return {"lat": point.get("latitude"), "lng": point.get("longitude")}
    return None


def decode_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: decode_value(v) for k, v in fields.items()}


def decode_document(doc: Dict[str, Any]) -> Document:
    data = decode_fields(doc.get("fields") or {})
    data["id"] = doc.get("name", "").rsplit("/", 1)[-1]
    return data


# Store --------------------------------------------------------------------


class FirestoreStore:
    """DocumentStore backed by Firestore.

    ``service`` may be injected (tests); otherwise it is built lazily from the
    service-account file with a socket timeout on every request.
    """

    def __init__(
        self,
        project_id: str,
        credentials_path: str = "",
        timeout: float = 10.0,
        service: Any = None,
    ) -> None:
        if not project_id:
            raise ValueError("Firestore project id is required")
        self._root = f"projects/{project_id}/databases/(default)/documents"
        self._credentials_path = credentials_path
        self._timeout = timeout
        self._service = service

    def _documents(self):
        if self._service is None:
            creds = _get_credentials(self._credentials_path)
            if creds is None:
                raise StoreError("Firestore credentials file not found")
            import google_auth_httplib2
            import httplib2
            from googleapiclient.discovery import build
            http = google_auth_httplib2.AuthorizedHttp(creds, http=httplib2.Http(timeout=self._timeout))
            self._service = build("firestore", "v1", http=http, cache_discovery=False)
        return self._service.projects().databases().documents()

    def _parent(self, collection: Collection, owner: Optional[str]) -> str:
        owner = check_owner(collection, owner)
        if owner is None:
            return self._root
        return f"{self._root}/users/{owner}"

    def _execute(self, request, action: str):
        from googleapiclient.errors import HttpError
        try:
            return request.execute()
        except HttpError as e:
            status = getattr(e.resp, "status", None)
            if status == 403:
                raise StoreError(
                    "Firestore 403: The caller does not have permission. "
                    "Grant the service account the Cloud Datastore User role.",
                    status_code=403,
                ) from e
            raise StoreError(f"Firestore {action} failed: {e}", status_code=status) from e
        except (OSError, TimeoutError) as e:
            raise StoreError(f"Firestore {action} failed: {e}") from e

    def find_by_name(self, collection: Collection, name: str) -> Optional[Document]:
        body = {
            "structuredQuery": {
                "from": [{"collectionId": collection.value}],
                "where": {
                    "fieldFilter": {
                        "field": {"fieldPath": "name"},
                        "op": "EQUAL",
                        "value": {"stringValue": name},
                    }
                },
                "limit": 1,
            }
        }
        request = self._documents().runQuery(parent=self._parent(collection, None), body=body)
        rows = self._execute(request, "query") or []
        for row in rows:
            if row.get("document"):
                return decode_document(row["document"])
        return None

    def list_all(self, collection: Collection, owner: Optional[str] = None) -> List[Document]:
        parent = self._parent(collection, owner)
        docs: List[Document] = []
        page_token: Optional[str] = None
        while True:
            kwargs: Dict[str, Any] = {"parent": parent, "collectionId": collection.value, "pageSize": _PAGE_SIZE}
            if page_token:
                kwargs["pageToken"] = page_token
            result = self._execute(self._documents().list(**kwargs), "list") or {}
            docs.extend(decode_document(d) for d in result.get("documents") or [])
            page_token = result.get("nextPageToken")
            if not page_token:
                return docs

    def append(self, collection: Collection, record: Document, owner: Optional[str] = None) -> str:
        fields = encode_fields({k: v for k, v in record.items() if k != "id"})
        kwargs: Dict[str, Any] = {
            "parent": self._parent(collection, owner),
            "collectionId": collection.value,
            "body": {"fields": fields},
        }
        if record.get("id"):
            kwargs["documentId"] = str(record["id"])
        created = self._execute(self._documents().createDocument(**kwargs), "write")
        return created.get("name", "").rsplit("/", 1)[-1]

    def delete(self, collection: Collection, doc_id: str, owner: Optional[str] = None) -> None:
        if not doc_id or "/" in doc_id:
            raise ValueError("Document id must be non-empty and must not contain '/'")
        name = f"{self._parent(collection, owner)}/{collection.value}/{doc_id}"
        try:
            self._execute(self._documents().delete(name=name), "delete")
        except StoreError as e:
            if e.status_code != 404:
                raise
            logger.debug("Document %s already deleted", name)

    def delete_all(self, collection: Collection, owner: Optional[str] = None) -> None:
        # One request per document; a failure part-way leaves the rest in place.
        for doc in self.list_all(collection, owner):
            self.delete(collection, doc["id"], owner)


__all__ = [
    "FirestoreStore",
    "decode_document",
    "decode_value",
    "encode_fields",
    "encode_value",
]
