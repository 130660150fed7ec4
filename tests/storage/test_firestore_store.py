import datetime as dt
import logging
import unittest
from typing import Any, Optional
from unittest.mock import patch

from storage import FirestoreSessionStore, StorageConfig, StorageReadError, StorageWriteError
from timer import SessionDraft, TimerConfiguration

NOW = dt.datetime(2024, 1, 1, 12, 0, tzinfo=dt.timezone.utc)


class _FakeSnapshot:
    def __init__(self, doc_id: str, data: Optional[dict[str, Any]]):
        self.id = doc_id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> Optional[dict[str, Any]]:
        return None if self._data is None else dict(self._data)


class _FakeDocument:
    def __init__(self, collection: "_FakeCollection", doc_id: str):
        self._collection = collection
        self.id = doc_id

    def get(self) -> _FakeSnapshot:
        return _FakeSnapshot(self.id, self._collection.docs.get(self.id))

    def set(self, data: dict[str, Any], merge: bool = False) -> None:
        self._collection.writes.append((self.id, dict(data), merge))
        if merge and self.id in self._collection.docs:
            self._collection.docs[self.id].update(data)
        else:
            self._collection.docs[self.id] = dict(data)

    def delete(self) -> None:
        self._collection.docs.pop(self.id, None)


class _FakeQuery:
    def __init__(self, collection: "_FakeCollection", ops: tuple = ()):
        self._collection = collection
        self.ops = ops

    def where(self, *, filter: Any) -> "_FakeQuery":
        return self._record(("where", filter))

    def order_by(self, field: str, direction: str = "ASCENDING") -> "_FakeQuery":
        return self._record(("order_by", field, direction))

    def stream(self):
        self._collection.queries.append(self.ops)
        if self._collection.fail_reads:
            raise RuntimeError("backend unavailable")
        return [_FakeSnapshot(doc_id, data) for doc_id, data in self._collection.docs.items()]

    def _record(self, op: tuple) -> "_FakeQuery":
        return _FakeQuery(self._collection, self.ops + (op,))


class _FakeCollection(_FakeQuery):
    def __init__(self):
        self.docs: dict[str, dict[str, Any]] = {}
        self.writes: list[tuple[str, dict[str, Any], bool]] = []
        self.queries: list[tuple] = []
        self.fail_reads = False
        self._next_id = 0
        super().__init__(self)

    def document(self, doc_id: Optional[str] = None) -> _FakeDocument:
        if doc_id is None:
            self._next_id += 1
            doc_id = f"auto{self._next_id}"
        return _FakeDocument(self, doc_id)


class _FakeClient:
    def __init__(self):
        self.collections: dict[str, _FakeCollection] = {}

    def collection(self, name: str) -> _FakeCollection:
        return self.collections.setdefault(name, _FakeCollection())


def _store(client: _FakeClient) -> FirestoreSessionStore:
    return FirestoreSessionStore(StorageConfig(), client=client, now_fn=lambda: NOW)


class FirestoreSessionStoreTests(unittest.TestCase):
    def test_read_settings_returns_none_when_document_missing(self) -> None:
        self.assertIsNone(_store(_FakeClient()).read_settings())

    def test_write_settings_merges_preset_durations(self) -> None:
        client = _FakeClient()
        store = _store(client)

        self.assertTrue(store.write_settings(TimerConfiguration()))

        writes = client.collection("settings").writes
        self.assertEqual(
            [("timer_settings", {"Lock In": 5400, "Small Break": 1200, "Long Break": 2700}, True)],
            writes,
        )
        self.assertEqual(5400, store.read_settings().duration_for("Lock In"))

    def test_read_settings_rejects_invalid_document(self) -> None:
        client = _FakeClient()
        client.collection("settings").docs["timer_settings"] = {"Lock In": "long"}

        with self.assertRaises(StorageReadError):
            _store(client).read_settings()

    def test_write_session_repeats_auto_id_and_timestamp(self) -> None:
        client = _FakeClient()
        session = _store(client).write_session(
            SessionDraft(date="2024-01-01", type="Lock In", duration=1500, overtime=60)
        )

        self.assertEqual("auto1", session.id)
        stored = client.collection("sessions").docs["auto1"]
        self.assertEqual("auto1", stored["id"])
        self.assertEqual(NOW, stored["timestamp"])
        self.assertEqual(60, stored["overtime"])
        self.assertFalse(stored["isPartialCompletion"])

    def test_read_all_sessions_orders_by_date_descending_and_skips_malformed(self) -> None:
        client = _FakeClient()
        sessions = client.collection("sessions")
        sessions.docs["a"] = {"id": "a", "date": "2024-01-01", "type": "Lock In", "duration": 60, "completed": True}
        sessions.docs["b"] = {"id": "b", "type": "Lock In", "duration": 60}

        with self.assertLogs("storage.firestore", level="WARNING"):
            store = FirestoreSessionStore(
                StorageConfig(),
                client=client,
                logger=logging.getLogger("storage.firestore"),
            )
            result = store.read_all_sessions()

        self.assertEqual(["a"], [session.id for session in result])
        self.assertEqual((("order_by", "date", "DESCENDING"),), sessions.queries[-1])

    def test_read_sessions_by_date_filters_and_orders_by_timestamp(self) -> None:
        client = _FakeClient()
        with patch("storage.firestore._field_filter", side_effect=lambda *args: args):
            _store(client).read_sessions_by_date("2024-01-01")

        self.assertEqual(
            (
                ("where", ("date", "==", "2024-01-01")),
                ("order_by", "timestamp", "ASCENDING"),
            ),
            client.collection("sessions").queries[-1],
        )

    def test_read_sessions_in_range_orders_by_date(self) -> None:
        client = _FakeClient()
        with patch("storage.firestore._field_filter", side_effect=lambda *args: args):
            _store(client).read_sessions_in_range("2024-01-01", "2024-01-07")

        self.assertEqual(
            (
                ("where", ("date", ">=", "2024-01-01")),
                ("where", ("date", "<=", "2024-01-07")),
                ("order_by", "date", "ASCENDING"),
            ),
            client.collection("sessions").queries[-1],
        )

    def test_query_failure_raises_read_error(self) -> None:
        client = _FakeClient()
        client.collection("sessions").fail_reads = True

        with self.assertRaises(StorageReadError):
            _store(client).read_all_sessions()

    def test_write_failure_raises_write_error(self) -> None:
        class _BrokenClient(_FakeClient):
            def collection(self, name: str):
                raise RuntimeError("permission denied")

        store = _store(_BrokenClient())
        with self.assertRaises(StorageWriteError):
            store.write_session(SessionDraft(date="2024-01-01", type="Lock In", duration=1))

    def test_delete_session_removes_document(self) -> None:
        client = _FakeClient()
        client.collection("sessions").docs["gone"] = {"date": "2024-01-01"}

        self.assertTrue(_store(client).delete_session("gone"))
        self.assertNotIn("gone", client.collection("sessions").docs)


if __name__ == "__main__":
    unittest.main()
