"""In-memory stand-ins for Firestore and Firebase Auth.

FakeFirestore implements the subset of the async Firestore client the
services use. Like Firestore, deleting a document leaves its subcollections
in place.
"""

from types import SimpleNamespace
from typing import Any

from google.api_core.exceptions import AlreadyExists, NotFound

from services.identity import IdentityService

APP_ID = "test-app"
ROOT = f"artifacts/{APP_ID}"


def app_path(*parts: str) -> str:
    """Full document path under the test app namespace."""
    return "/".join((ROOT, *parts))


class FakeSnapshot:
    def __init__(self, reference: "FakeDocument", data: dict[str, Any] | None):
        self.reference = reference
        self.id = reference.id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> dict[str, Any] | None:
        return dict(self._data) if self._data is not None else None

    def get(self, field: str) -> Any:
        return (self._data or {}).get(field)


class FakeDocument:
    def __init__(self, store: "FakeFirestore", path: str):
        self._store = store
        self.path = path
        self.id = path.rsplit("/", 1)[-1]

    def collection(self, name: str) -> "FakeCollection":
        return FakeCollection(self._store, f"{self.path}/{name}")

    async def get(self) -> FakeSnapshot:
        self._store.check("get", self.path)
        return FakeSnapshot(self, self._store.docs.get(self.path))

    async def set(self, data: dict[str, Any], merge: bool = False) -> None:
        self._store.check("set", self.path)
        if merge and self.path in self._store.docs:
            self._store.docs[self.path].update(data)
        else:
            self._store.docs[self.path] = dict(data)

    async def create(self, data: dict[str, Any]) -> None:
        self._store.check("create", self.path)
        if self.path in self._store.docs:
            raise AlreadyExists(f"Document already exists: {self.path}")
        self._store.docs[self.path] = dict(data)

    async def update(self, data: dict[str, Any]) -> None:
        self._store.check("update", self.path)
        if self.path not in self._store.docs:
            raise NotFound(f"No document to update: {self.path}")
        self._store.docs[self.path].update(data)

    async def delete(self) -> None:
        self._store.check("delete", self.path)
        self._store.docs.pop(self.path, None)


class FakeAggregation:
    def __init__(self, query: "FakeQuery"):
        self._query = query

    async def get(self):
        docs = await self._query.get()
        return [[SimpleNamespace(alias="count", value=len(docs))]]


class FakeQuery:
    def __init__(self, store: "FakeFirestore", path: str, filters=()):
        self._store = store
        self.path = path
        self._filters = tuple(filters)

    def where(self, field_path=None, op_string=None, value=None, *, filter=None):
        if filter is not None:
            field_path, op_string, value = (
                filter.field_path,
                filter.op_string,
                filter.value,
            )
        return FakeQuery(
            self._store, self.path, self._filters + ((field_path, op_string, value),)
        )

    def count(self) -> FakeAggregation:
        return FakeAggregation(self)

    def _matches(self, data: dict[str, Any]) -> bool:
        for field_path, op_string, value in self._filters:
            if op_string == "==" and data.get(field_path) != value:
                return False
            if op_string == "array_contains" and value not in (
                data.get(field_path) or []
            ):
                return False
        return True

    async def get(self) -> list[FakeSnapshot]:
        self._store.check("get", self.path)
        prefix = f"{self.path}/"
        snapshots = []
        for path in sorted(self._store.docs):
            if not path.startswith(prefix) or "/" in path[len(prefix) :]:
                continue
            data = self._store.docs[path]
            if self._matches(data):
                snapshots.append(
                    FakeSnapshot(FakeDocument(self._store, path), dict(data))
                )
        return snapshots


class FakeCollection(FakeQuery):
    def __init__(self, store: "FakeFirestore", path: str):
        super().__init__(store, path)
        self.id = path.rsplit("/", 1)[-1]

    def document(self, document_id: str | None = None) -> FakeDocument:
        if document_id is None:
            self._store.auto_id += 1
            document_id = f"auto-{self._store.auto_id}"
        return FakeDocument(self._store, f"{self.path}/{document_id}")


class FakeBatch:
    def __init__(self):
        self._deletes: list[FakeDocument] = []

    def delete(self, reference: FakeDocument) -> None:
        self._deletes.append(reference)

    async def commit(self) -> None:
        for reference in self._deletes:
            await reference.delete()
        self._deletes = []


class FakeFirestore:
    """Flat path -> data map with failure injection."""

    def __init__(self):
        self.docs: dict[str, dict[str, Any]] = {}
        self.failures: dict[tuple[str, str], Exception] = {}
        self.auto_id = 0

    def collection(self, name: str) -> FakeCollection:
        return FakeCollection(self, name)

    def document(self, path: str) -> FakeDocument:
        return FakeDocument(self, path)

    def batch(self) -> FakeBatch:
        return FakeBatch()

    def fail(self, op: str, path: str, exc: Exception | None = None) -> None:
        """Make ``op`` on ``path`` raise (get, set, create, update, delete)."""
        self.failures[(op, path)] = exc or RuntimeError(f"{op} failed for {path}")

    def check(self, op: str, path: str) -> None:
        exc = self.failures.get((op, path))
        if exc is not None:
            raise exc

    def snapshot(self) -> dict[str, dict[str, Any]]:
        return {path: dict(data) for path, data in self.docs.items()}


def make_account(
    uid: str,
    email: str | None = None,
    display_name: str | None = None,
    photo_url: str | None = None,
    created_ms: int | None = None,
    last_sign_in_ms: int | None = None,
) -> SimpleNamespace:
    """Build an object shaped like firebase_admin.auth.UserRecord."""
    return SimpleNamespace(
        uid=uid,
        email=email,
        display_name=display_name,
        photo_url=photo_url,
        disabled=False,
        user_metadata=SimpleNamespace(
            creation_timestamp=created_ms, last_sign_in_timestamp=last_sign_in_ms
        ),
    )


class FakeIdentityService(IdentityService):
    """Identity directory held in memory.

    Only the primitive calls are replaced, so page iteration runs the real
    IdentityService code.
    """

    def __init__(self, accounts=(), fail_delete: bool = False):
        super().__init__(app=None)
        self.accounts = {account.uid: account for account in accounts}
        self.fail_delete = fail_delete
        self.list_calls: list[tuple[str | None, int]] = []

    async def delete_user(self, user_id: str) -> None:
        if self.fail_delete:
            raise RuntimeError("auth service unavailable")
        if user_id not in self.accounts:
            raise ValueError(f"No user record found for the provided user ID: {user_id}")
        del self.accounts[user_id]

    async def set_disabled(self, user_id: str, disabled: bool) -> None:
        if user_id not in self.accounts:
            raise ValueError(f"No user record found for the provided user ID: {user_id}")
        self.accounts[user_id].disabled = disabled

    async def list_users_page(self, page_token=None, max_results=1000):
        self.list_calls.append((page_token, max_results))
        uids = sorted(self.accounts)
        start = int(page_token) if page_token else 0
        end = start + max_results
        return SimpleNamespace(
            users=[self.accounts[uid] for uid in uids[start:end]],
            next_page_token=str(end) if end < len(uids) else "",
        )
