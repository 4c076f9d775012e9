"""
In-memory stand-in for the Supabase client used by the services.

Covers the subset of the PostgREST query builder, Storage and Auth APIs that
roomservice calls, plus failure injection per (table, operation).
"""
import uuid
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional, Tuple


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload: Any = None
        self.filters: List[Callable[[dict], bool]] = []
        self.order_by: List[Tuple[str, bool]] = []
        self.limit_n: Optional[int] = None

    # ---- operations ----
    def select(self, columns: str = "*"):
        self.op = "select"
        return self

    def insert(self, data):
        self.op = "insert"
        self.payload = data
        return self

    def update(self, data):
        self.op = "update"
        self.payload = data
        return self

    def delete(self):
        self.op = "delete"
        return self

    # ---- filters ----
    def eq(self, column: str, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column: str, values):
        allowed = set(values)
        self.filters.append(lambda row: row.get(column) in allowed)
        return self

    def is_(self, column: str, value):
        if value == "null":
            self.filters.append(lambda row: row.get(column) is None)
        else:
            self.filters.append(lambda row: row.get(column) is value)
        return self

    def order(self, column: str, desc: bool = False):
        self.order_by.append((column, desc))
        return self

    def limit(self, n: int):
        self.limit_n = n
        return self

    # ---- execution ----
    def _matches(self, row: dict) -> bool:
        return all(f(row) for f in self.filters)

    def execute(self) -> FakeResponse:
        self.db.calls.append((self.table, self.op))

        failure = self.db.failures.get((self.table, self.op))
        if failure is not None:
            raise failure

        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            created = []
            for item in items:
                row = dict(item)
                row.setdefault("id", str(uuid.uuid4()))
                rows.append(row)
                created.append(dict(row))
            return FakeResponse(created)

        matched = [row for row in rows if self._matches(row)]

        if self.op == "update":
            for row in matched:
                row.update(self.payload)
            return FakeResponse([dict(row) for row in matched])

        if self.op == "delete":
            self.db.tables[self.table] = [row for row in rows if not self._matches(row)]
            return FakeResponse([dict(row) for row in matched])

        for column, desc in reversed(self.order_by):
            matched.sort(key=lambda r: (r.get(column) is None, r.get(column)), reverse=desc)
        if self.limit_n is not None:
            matched = matched[: self.limit_n]
        return FakeResponse([dict(row) for row in matched])


class FakeBucket:
    def __init__(self, storage: "FakeStorage", name: str):
        self.storage = storage
        self.name = name

    def upload(self, path: str, file: bytes, file_options: Optional[dict] = None):
        if self.storage.upload_error is not None:
            raise self.storage.upload_error

        key = (self.name, path)
        upsert = (file_options or {}).get("upsert") == "true"
        if key in self.storage.objects and not upsert:
            raise RuntimeError("The resource already exists")

        self.storage.objects[key] = file
        self.storage.uploads.append(key)
        return SimpleNamespace(path=path, full_path=f"{self.name}/{path}")

    def get_public_url(self, path: str) -> str:
        # storage3 appends a trailing '?' in some releases
        return f"{self.storage.base_url}/storage/v1/object/public/{self.name}/{path}?"


class FakeStorage:
    def __init__(self, base_url: str, buckets: Optional[List[str]] = None):
        self.base_url = base_url
        self.buckets = [SimpleNamespace(name=name, public=True) for name in (buckets or [])]
        self.objects: Dict[Tuple[str, str], bytes] = {}
        self.uploads: List[Tuple[str, str]] = []
        self.upload_error: Optional[Exception] = None
        self.list_error: Optional[Exception] = None

    def list_buckets(self):
        if self.list_error is not None:
            raise self.list_error
        return list(self.buckets)

    def create_bucket(self, id: str, name: Optional[str] = None, options: Optional[dict] = None):
        self.buckets.append(SimpleNamespace(name=name or id, public=(options or {}).get("public", False)))
        return {"name": name or id}

    def from_(self, name: str) -> FakeBucket:
        return FakeBucket(self, name)


class FakeAuth:
    def __init__(self, tokens: Optional[Dict[str, str]] = None):
        self.tokens = dict(tokens or {})

    def get_user(self, jwt: str):
        account_id = self.tokens.get(jwt)
        if account_id is None:
            raise RuntimeError("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=SimpleNamespace(id=account_id, email=f"{account_id}@example.com"))


class FakeSupabase:
    def __init__(self, base_url: str = "https://fake.supabase.co"):
        self.tables: Dict[str, List[dict]] = {}
        self.failures: Dict[Tuple[str, str], Exception] = {}
        self.calls: List[Tuple[str, str]] = []
        self.storage = FakeStorage(base_url, buckets=["qrcodes"])
        self.auth = FakeAuth()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def seed(self, table: str, *rows: dict) -> None:
        self.tables.setdefault(table, []).extend(dict(row) for row in rows)

    def rows(self, table: str) -> List[dict]:
        return self.tables.get(table, [])

    def fail(self, table: str, op: str, error: Optional[Exception] = None) -> None:
        self.failures[(table, op)] = error or RuntimeError(f"{op} on {table} timed out")
