"""In-memory stand-in for the supabase-py client used by the tests.

Covers the query-builder calls made by TableRepository (select with embedded
relations, eq, in_, is_, order, limit, offset, range, single, maybe_single,
insert, update, upsert, delete, exact counts) and the auth calls made by
AuthService and SessionManager.

``FakeSupabase`` is both the shared store and a client of it. ``scoped(token)``
hands out further clients over the same store; like supabase-py, a client that
signs in or out rebinds the bearer token its table calls send, and every
executed query is recorded in ``request_log`` with that token.

Embedded relations follow the PostgREST convention: ``clients(*)`` on a row
holding ``client_id`` resolves to one row (or None), otherwise it resolves to
the list of related rows pointing back through ``<table singular>_id``.
"""

import copy
import threading
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional


class FakeAPIError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _singular(name: str) -> str:
    return name[:-1] if name.endswith("s") else name


def _split_columns(columns: str) -> List[str]:
    parts, depth, current = [], 0, ""
    for ch in columns:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if ch == "," and depth == 0:
            parts.append(current.strip())
            current = ""
        else:
            current += ch
    if current.strip():
        parts.append(current.strip())
    return parts


class FakeResponse:
    def __init__(self, data, count: Optional[int] = None):
        self.data = data
        self.count = count


class FakeQuery:
    def __init__(self, client: "FakeClient", table: str):
        self.client = client
        self.db = client.store
        self.table = table
        self.operation = "select"
        self.payload: Any = None
        self.on_conflict = "id"
        self.columns: List[str] = ["*"]
        self.embeds: List[str] = []
        self.count_mode: Optional[str] = None
        self.filters: List[Callable[[Dict[str, Any]], bool]] = []
        self.ordering: List[tuple] = []
        self.limit_value: Optional[int] = None
        self.offset_value = 0
        self.single_mode: Optional[str] = None

    # builder

    def select(self, columns: str = "*", count: Optional[str] = None):
        self.columns, self.embeds = [], []
        for part in _split_columns(columns):
            if "(" in part:
                self.embeds.append(part.split("(", 1)[0].strip())
            else:
                self.columns.append(part)
        self.count_mode = count
        return self

    def insert(self, rows):
        self.operation, self.payload = "insert", rows
        return self

    def update(self, changes):
        self.operation, self.payload = "update", changes
        return self

    def upsert(self, rows, on_conflict: str = "id"):
        self.operation, self.payload, self.on_conflict = "upsert", rows, on_conflict
        return self

    def delete(self):
        self.operation = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column, value):
        self.filters.append(lambda row: row.get(column) != value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def is_(self, column, value):
        expected = None if value in (None, "null") else value
        self.filters.append(lambda row: row.get(column) is expected)
        return self

    def order(self, column, desc: bool = False):
        self.ordering.append((column, desc))
        return self

    def limit(self, size: int):
        self.limit_value = size
        return self

    def offset(self, start: int):
        self.offset_value = start
        return self

    def range(self, start: int, end: int):
        self.offset_value = start
        self.limit_value = end - start + 1
        return self

    def single(self):
        self.single_mode = "single"
        return self

    def maybe_single(self):
        self.single_mode = "maybe_single"
        return self

    # execution

    def execute(self):
        self.db.check_failure(self.operation, self.table)
        with self.db.lock:
            self.db.request_log.append((self.operation, self.table, self.client.access_token))
            handler = getattr(self, f"_run_{self.operation}")
            return handler()

    def _matching(self) -> List[Dict[str, Any]]:
        rows = self.db.tables.setdefault(self.table, [])
        return [row for row in rows if all(f(row) for f in self.filters)]

    def _run_select(self):
        rows = self._matching()
        for column, desc in reversed(self.ordering):
            rows = sorted(rows, key=lambda r: (r.get(column) is None, r.get(column)), reverse=desc)
        total = len(rows)
        rows = rows[self.offset_value:]
        if self.limit_value is not None:
            rows = rows[:self.limit_value]
        data = [self._project(row) for row in rows]
        count = total if self.count_mode == "exact" else None

        if self.single_mode == "maybe_single":
            if not data:
                return None
            return FakeResponse(data[0], count)
        if self.single_mode == "single":
            if len(data) != 1:
                raise FakeAPIError("JSON object requested, multiple (or no) rows returned")
            return FakeResponse(data[0], count)
        return FakeResponse(data, count)

    def _project(self, row: Dict[str, Any]) -> Dict[str, Any]:
        if "*" in self.columns:
            result = copy.deepcopy(row)
        else:
            result = {c: copy.deepcopy(row.get(c)) for c in self.columns}
        for relation in self.embeds:
            result[relation] = self._resolve(row, relation)
        return result

    def _resolve(self, row: Dict[str, Any], relation: str):
        related = self.db.tables.get(relation, [])
        fk = f"{_singular(relation)}_id"
        if fk in row:
            target = row.get(fk)
            match = next((r for r in related if target is not None and r.get("id") == target), None)
            return copy.deepcopy(match)
        back_fk = f"{_singular(self.table)}_id"
        return [copy.deepcopy(r) for r in related if r.get(back_fk) == row.get("id")]

    def _prepare(self, row: Dict[str, Any]) -> Dict[str, Any]:
        row = copy.deepcopy(dict(row))
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", _now())
        return row

    def _run_insert(self):
        rows = self.payload if isinstance(self.payload, list) else [self.payload]
        table = self.db.tables.setdefault(self.table, [])
        created = []
        for raw in rows:
            row = self._prepare(raw)
            if any(existing.get("id") == row["id"] for existing in table):
                raise FakeAPIError(f'duplicate key value violates unique constraint "{self.table}_pkey"')
            table.append(row)
            created.append(copy.deepcopy(row))
        self.db.write_log.append(("insert", self.table, [r["id"] for r in created]))
        return FakeResponse(created)

    def _run_upsert(self):
        rows = self.payload if isinstance(self.payload, list) else [self.payload]
        table = self.db.tables.setdefault(self.table, [])
        written = []
        for raw in rows:
            key = raw.get(self.on_conflict)
            existing = next((r for r in table if key is not None and r.get(self.on_conflict) == key), None)
            if existing is not None:
                existing.update(copy.deepcopy(dict(raw)))
                written.append(copy.deepcopy(existing))
            else:
                row = self._prepare(raw)
                table.append(row)
                written.append(copy.deepcopy(row))
        self.db.write_log.append(("upsert", self.table, [r["id"] for r in written]))
        return FakeResponse(written)

    def _run_update(self):
        updated = []
        for row in self._matching():
            row.update(copy.deepcopy(dict(self.payload)))
            updated.append(copy.deepcopy(row))
        self.db.write_log.append(("update", self.table, dict(self.payload)))
        return FakeResponse(updated)

    def _run_delete(self):
        doomed = self._matching()
        table = self.db.tables.setdefault(self.table, [])
        self.db.tables[self.table] = [row for row in table if row not in doomed]
        return FakeResponse([copy.deepcopy(r) for r in doomed])


class FakeSubscription:
    def __init__(self, auth: "FakeAuth", callback):
        self.auth = auth
        self.callback = callback

    def unsubscribe(self):
        if self.callback in self.auth.listeners:
            self.auth.listeners.remove(self.callback)


class FakeAdminAuth:
    def __init__(self, auth: "FakeAuth"):
        self.auth = auth

    def create_user(self, attributes: Dict[str, Any]):
        user = self.auth.register(
            attributes["email"],
            attributes["password"],
            attributes.get("user_metadata") or {},
        )
        return SimpleNamespace(user=user)

    def delete_user(self, user_id: str):
        self.auth.check_failure("delete_user")
        self.auth.deleted_user_ids.append(user_id)
        for email, record in list(self.auth.accounts.items()):
            if record["user"].id == user_id:
                del self.auth.accounts[email]

    def sign_out(self, jwt: str, scope: str = "global"):
        self.auth.check_failure("revoke")
        self.auth.tokens.pop(jwt, None)
        self.auth.store.revoked_tokens.append(jwt)


class FakeAuth:
    """Auth API of one client. Accounts and issued tokens live in the shared store."""

    def __init__(self, client: "FakeClient"):
        self.client = client
        self.store = client.store
        self.current_session = None
        self.listeners: List[Callable] = []
        self.admin = FakeAdminAuth(self)

    @property
    def accounts(self) -> Dict[str, Dict[str, Any]]:
        return self.store.accounts

    @property
    def tokens(self) -> Dict[str, Any]:
        return self.store.tokens

    @property
    def deleted_user_ids(self) -> List[str]:
        return self.store.deleted_user_ids

    @property
    def confirm_email(self) -> bool:
        return self.store.confirm_email

    @confirm_email.setter
    def confirm_email(self, value: bool):
        self.store.confirm_email = value

    def check_failure(self, operation: str):
        self.store.check_failure(operation, "auth")

    def register(self, email: str, password: str, metadata: Dict[str, Any]):
        self.check_failure("sign_up")
        if email in self.accounts:
            raise FakeAPIError("User already registered")
        user = SimpleNamespace(
            id=str(uuid.uuid4()),
            email=email,
            user_metadata=dict(metadata),
            app_metadata={},
            created_at=_now(),
            updated_at=_now(),
        )
        self.accounts[email] = {"user": user, "password": password}
        return user

    def issue_session(self, user):
        token = f"token-{uuid.uuid4()}"
        session = SimpleNamespace(access_token=token, refresh_token=f"refresh-{token}", user=user)
        self.tokens[token] = user
        return session

    def _emit(self, event: str, session):
        # the client itself listens first and swaps its Authorization header
        if event == "SIGNED_IN":
            self.client.access_token = session.access_token
        elif event == "SIGNED_OUT":
            self.client.access_token = None
        for callback in list(self.listeners):
            callback(event, session)

    def sign_up(self, credentials: Dict[str, Any]):
        metadata = (credentials.get("options") or {}).get("data") or {}
        user = self.register(credentials["email"], credentials["password"], metadata)
        if self.confirm_email:
            return SimpleNamespace(user=user, session=None)
        session = self.issue_session(user)
        self.current_session = session
        self._emit("SIGNED_IN", session)
        return SimpleNamespace(user=user, session=session)

    def sign_in_with_password(self, credentials: Dict[str, Any]):
        self.check_failure("sign_in")
        record = self.accounts.get(credentials["email"])
        if record is None or record["password"] != credentials["password"]:
            raise FakeAPIError("Invalid login credentials")
        session = self.issue_session(record["user"])
        self.current_session = session
        self._emit("SIGNED_IN", session)
        return SimpleNamespace(user=record["user"], session=session)

    def sign_out(self):
        self.check_failure("sign_out")
        if self.current_session is not None:
            self.tokens.pop(self.current_session.access_token, None)
        self.current_session = None
        self._emit("SIGNED_OUT", None)

    def get_session(self):
        return self.current_session

    def get_user(self, jwt: str = None):
        user = self.tokens.get(jwt)
        if user is None:
            raise FakeAPIError("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=user)

    def on_auth_state_change(self, callback):
        self.listeners.append(callback)
        return FakeSubscription(self, callback)

    def expire_session(self):
        """Simulate the library dropping an expired session"""
        self.current_session = None
        self._emit("SIGNED_OUT", None)


class FakeClient:
    def __init__(self, store: "FakeSupabase", access_token: Optional[str] = None):
        self.store = store
        self.access_token = access_token
        self.auth = FakeAuth(self)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


class FakeSupabase(FakeClient):
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.failures: Dict[tuple, Exception] = {}
        self.write_log: List[tuple] = []
        self.request_log: List[tuple] = []
        self.lock = threading.RLock()
        self.accounts: Dict[str, Dict[str, Any]] = {}
        self.tokens: Dict[str, Any] = {}
        self.deleted_user_ids: List[str] = []
        self.revoked_tokens: List[str] = []
        self.confirm_email = False
        self.scoped_clients: List[FakeClient] = []
        super().__init__(self)

    def scoped(self, access_token: Optional[str] = None) -> FakeClient:
        """Another client over this store, optionally sending access_token"""
        client = FakeClient(self, access_token)
        self.scoped_clients.append(client)
        return client

    def fail(self, operation: str, table: str, message: str = "connection refused"):
        """Make every later `operation` on `table` raise"""
        self.failures[(operation, table)] = FakeAPIError(message)

    def check_failure(self, operation: str, table: str):
        error = self.failures.get((operation, table))
        if error is not None:
            raise error

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return self.tables.get(table, [])

    def tokens_sent(self, table: str, operation: str = "select") -> List[Optional[str]]:
        """Bearer tokens carried by the recorded `operation` calls on `table`, in order"""
        return [token for op, name, token in self.request_log if op == operation and name == table]

    def seed(self, table: str, *rows: Dict[str, Any]) -> None:
        for row in rows:
            self.table(table).insert(row).execute()

    def create_account(self, email: str, full_name: str, role: str = "team", password: str = "secret123") -> str:
        """Identity plus profile row; returns a bearer token for it"""
        user = self.auth.register(email, password, {"full_name": full_name})
        self.seed("profiles", {"id": user.id, "email": email, "full_name": full_name, "role": role})
        return self.auth.issue_session(user).access_token
