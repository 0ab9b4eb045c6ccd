import copy
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient


def iso(delta: timedelta = timedelta(0)) -> str:
    """UTC timestamp `delta` away from now, formatted the way PostgREST returns it."""
    return (datetime.now(timezone.utc) + delta).isoformat()


def _comparable(value):
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return value
    return value


class FakeResult:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Just enough of the PostgREST query builder for the services under test."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.op = "select"
        self.columns = "*"
        self.payload = None
        self.filters = []
        self._order = None
        self._limit = None
        self._offset = 0
        self._single = None

    # operations
    def select(self, columns="*", **kwargs):
        if self.op == "select":
            self.columns = columns
        return self

    def insert(self, data, **kwargs):
        self.op = "insert"
        self.payload = data
        return self

    def update(self, data, **kwargs):
        self.op = "update"
        self.payload = data
        return self

    def delete(self, **kwargs):
        self.op = "delete"
        return self

    # filters
    def eq(self, column, value):
        self.filters.append(("eq", column, value))
        return self

    def lt(self, column, value):
        self.filters.append(("lt", column, value))
        return self

    def gt(self, column, value):
        self.filters.append(("gt", column, value))
        return self

    def in_(self, column, values):
        self.filters.append(("in", column, list(values)))
        return self

    def is_(self, column, value):
        self.filters.append(("is", column, value))
        return self

    def contains(self, column, values):
        self.filters.append(("contains", column, list(values)))
        return self

    # modifiers
    def order(self, column, desc=False, **kwargs):
        self._order = (column, desc)
        return self

    def limit(self, count, **kwargs):
        self._limit = count
        return self

    def offset(self, count):
        self._offset = count
        return self

    def maybe_single(self):
        self._single = "maybe"
        return self

    def single(self):
        self._single = "single"
        return self

    def _matches(self, row):
        for kind, column, value in self.filters:
            current = row.get(column)
            if kind == "eq" and current != value:
                return False
            if kind == "in" and current not in value:
                return False
            if kind == "is" and value == "null" and current is not None:
                return False
            if kind == "contains" and not all(v in (current or []) for v in value):
                return False
            if kind in ("lt", "gt"):
                if current is None:
                    return False
                left, right = _comparable(current), _comparable(value)
                if kind == "lt" and not left < right:
                    return False
                if kind == "gt" and not left > right:
                    return False
        return True

    def _project(self, row):
        if self.columns == "*":
            return copy.deepcopy(row)
        names = [c.strip() for c in self.columns.split(",")]
        return {name: copy.deepcopy(row.get(name)) for name in names}

    def execute(self):
        self.db.calls.append({
            "table": self.table_name,
            "op": self.op,
            "filters": list(self.filters),
            "payload": copy.deepcopy(self.payload),
        })
        if (self.table_name, self.op) in self.db.failures:
            raise Exception(self.db.failures[(self.table_name, self.op)])

        rows = self.db.tables.setdefault(self.table_name, [])

        if self.op == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = []
            for item in items:
                row = {"id": str(uuid.uuid4()), "created_at": iso(), **copy.deepcopy(item)}
                rows.append(row)
                inserted.append(copy.deepcopy(row))
            return FakeResult(inserted)

        matched = [row for row in rows if self._matches(row)]

        if self.op == "update":
            for row in matched:
                row.update(copy.deepcopy(self.payload))
            return FakeResult([copy.deepcopy(row) for row in matched])

        if self.op == "delete":
            self.db.tables[self.table_name] = [row for row in rows if row not in matched]
            return FakeResult([copy.deepcopy(row) for row in matched])

        if self._order:
            column, desc = self._order
            matched = sorted(matched, key=lambda r: _comparable(r.get(column) or ""), reverse=desc)
        matched = matched[self._offset:]
        if self._limit is not None:
            matched = matched[:self._limit]
        data = [self._project(row) for row in matched]

        if self._single == "maybe":
            return FakeResult(data[0] if data else None)
        if self._single == "single":
            if len(data) != 1:
                raise Exception("PGRST116: JSON object requested, multiple (or no) rows returned")
            return FakeResult(data[0])
        return FakeResult(data)


class FakeRpc:
    def __init__(self, db, name, params):
        self.db = db
        self.name = name
        self.params = params

    def execute(self):
        self.db.calls.append({"table": None, "op": "rpc", "name": self.name, "payload": self.params})
        if self.name == "check_email_exists":
            return FakeResult(self.params["email_to_check"].lower() in self.db.existing_emails)
        raise Exception(f"Unknown function {self.name}")


class FakeAuth:
    def __init__(self):
        self.users_by_token = {}
        self.otp_requests = []
        self.recover_requests = []
        self.sign_outs = 0
        self.otp_error = None

    def get_user(self, jwt=None):
        user = self.users_by_token.get(jwt)
        if user is None:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=user)

    def sign_in_with_otp(self, credentials):
        if self.otp_error:
            raise self.otp_error
        self.otp_requests.append(copy.deepcopy(credentials))
        return SimpleNamespace(user=None, session=None)

    def reset_password_for_email(self, email, options=None):
        self.recover_requests.append((email, options))

    def sign_out(self):
        self.sign_outs += 1


class FakeBucket:
    def __init__(self, storage, name):
        self.storage = storage
        self.name = name

    def upload(self, path, file, file_options=None):
        self.storage.uploads.append({"bucket": self.name, "path": path, "content": file, "options": file_options})
        return SimpleNamespace(path=path)

    def get_public_url(self, path):
        return f"https://fake.supabase.co/storage/v1/object/public/{self.name}/{path}"


class FakeStorage:
    def __init__(self):
        self.uploads = []

    def from_(self, bucket):
        return FakeBucket(self, bucket)


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.calls = []
        self.failures = {}
        self.existing_emails = set()
        self.auth = FakeAuth()
        self.storage = FakeStorage()

    def table(self, name):
        return FakeQuery(self, name)

    def rpc(self, name, params=None):
        return FakeRpc(self, name, params or {})

    def seed(self, table, *rows):
        stored = []
        for row in rows:
            row = {"id": str(uuid.uuid4()), "created_at": iso(), **row}
            self.tables.setdefault(table, []).append(row)
            stored.append(row)
        return stored[0] if len(stored) == 1 else stored

    def rows(self, table):
        return self.tables.get(table, [])

    def calls_for(self, table, op=None):
        return [c for c in self.calls if c["table"] == table and (op is None or c["op"] == op)]

    def login(self, user_id=None, email="user@example.com", user_type="creator", **metadata):
        """Register a bearer token for a user and return request headers."""
        user_id = user_id or str(uuid.uuid4())
        token = f"token-{user_id}"
        self.existing_emails.add(email.lower())
        self.auth.users_by_token[token] = SimpleNamespace(
            id=user_id,
            email=email,
            user_metadata={"user_type": user_type, **metadata},
            app_metadata={},
            created_at=iso(),
            updated_at=None,
        )
        return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture()
def app(fake_supabase):
    from app.main import app as fastapi_app
    from app.database.supabase_client import get_supabase
    from app.modules.auth.service import clear_auth_cache
    from app.modules.support.service import clear_rate_limits

    clear_auth_cache()
    clear_rate_limits()
    fastapi_app.dependency_overrides[get_supabase] = lambda: fake_supabase
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)
