"""Unit tests for the session store."""

import json
import random

import pytest_check as check

from pdfchat.models.schemas import DEFAULT_TITLE, Message, Sender, Session, dump_sessions
from pdfchat.storage.kv_store import MappingKeyValueStore
from pdfchat.storage.session_store import STORAGE_KEY, SessionStore


def _persisted(kv: MappingKeyValueStore) -> list[dict]:
    return json.loads(kv.get(STORAGE_KEY) or "null")


class TestLoad:
    """Tests for restoring the session list at startup."""

    def test_nothing_persisted(self, store: SessionStore) -> None:
        assert store.load() == []
        assert store.active_id is None

    def test_restores_persisted_sessions(self, kv: MappingKeyValueStore) -> None:
        sessions = [Session(title="one"), Session(title="two")]
        kv.set(STORAGE_KEY, dump_sessions(sessions))

        restored = SessionStore(kv).load()

        assert restored == sessions

    def test_unparseable_value_yields_empty_list(self, kv: MappingKeyValueStore) -> None:
        kv.set(STORAGE_KEY, "{definitely not json")

        store = SessionStore(kv)

        assert store.load() == []
        assert store.sessions == []

    def test_wrong_shape_yields_empty_list(self, kv: MappingKeyValueStore) -> None:
        kv.set(STORAGE_KEY, json.dumps({"id": "not-a-list"}))

        assert SessionStore(kv).load() == []

    def test_duplicate_ids_keep_first(self, kv: MappingKeyValueStore) -> None:
        first = Session(id="same", title="first")
        second = Session(id="same", title="second")
        kv.set(STORAGE_KEY, dump_sessions([first, second]))

        restored = SessionStore(kv).load()

        assert [s.title for s in restored] == ["first"]


class TestCreate:
    def test_new_session_is_active_and_first(self, store: SessionStore) -> None:
        older = store.create()
        newer = store.create()

        check.equal([s.id for s in store.sessions], [newer, older])
        check.equal(store.active_id, newer)

    def test_new_session_is_empty(self, store: SessionStore) -> None:
        session = store.get(store.create())

        assert session is not None
        check.equal(session.title, DEFAULT_TITLE)
        check.equal(session.messages, [])
        check.is_none(session.processed_document)

    def test_persists(self, store: SessionStore, kv: MappingKeyValueStore) -> None:
        session_id = store.create()

        assert [s["id"] for s in _persisted(kv)] == [session_id]


class TestDelete:
    def test_deleting_active_clears_active(self, store: SessionStore) -> None:
        session_id = store.create()

        store.delete(session_id)

        check.is_none(store.active_id)
        check.is_none(store.active_session)
        check.equal(store.sessions, [])

    def test_deleting_other_keeps_active(self, store: SessionStore) -> None:
        other = store.create()
        active = store.create()

        store.delete(other)

        check.equal(store.active_id, active)
        check.equal([s.id for s in store.sessions], [active])

    def test_unknown_id_is_noop(self, store: SessionStore, kv: MappingKeyValueStore) -> None:
        store.create()
        before = kv.get(STORAGE_KEY)

        store.delete("missing")

        check.equal(len(store.sessions), 1)
        check.equal(kv.get(STORAGE_KEY), before)

    def test_persists(self, store: SessionStore, kv: MappingKeyValueStore) -> None:
        keep = store.create()
        drop = store.create()

        store.delete(drop)

        assert [s["id"] for s in _persisted(kv)] == [keep]

    def test_active_id_always_valid_under_random_operations(self, store: SessionStore) -> None:
        rng = random.Random(1234)
        for _ in range(300):
            ids = [s.id for s in store.sessions]
            if not ids or rng.random() < 0.5:
                store.create()
            else:
                store.delete(rng.choice(ids))

            ids = [s.id for s in store.sessions]
            assert store.active_id is None or store.active_id in ids
            assert len(ids) == len(set(ids))


class TestSetActive:
    def test_switches_active(self, store: SessionStore) -> None:
        first = store.create()
        store.create()

        store.set_active(first)

        assert store.active_id == first
        assert store.active_session is not None
        assert store.active_session.id == first

    def test_dangling_id_has_no_active_session(self, store: SessionStore) -> None:
        store.create()

        store.set_active("ghost")

        check.equal(store.active_id, "ghost")
        check.is_none(store.active_session)

    def test_unset(self, store: SessionStore) -> None:
        store.create()

        store.set_active(None)

        assert store.active_session is None


class TestAppendMessage:
    def test_appends_in_order(self, store: SessionStore) -> None:
        session_id = store.create()
        first, second, third = Message.user("a"), Message.ai("b"), Message.user("c")

        for message in (first, second, third):
            store.append_message(session_id, message)

        session = store.get(session_id)
        assert session is not None
        assert session.messages == [first, second, third]

    def test_missing_session_is_noop(self, store: SessionStore, kv: MappingKeyValueStore) -> None:
        session_id = store.create()
        store.delete(session_id)
        before = kv.get(STORAGE_KEY)

        store.append_message(session_id, Message.ai("late answer"))

        check.equal(store.sessions, [])
        check.equal(kv.get(STORAGE_KEY), before)

    def test_first_user_message_names_session(self, store: SessionStore) -> None:
        session_id = store.create()

        store.append_message(session_id, Message.user("Explain the budget table"))
        store.append_message(session_id, Message.user("And the appendix?"))

        session = store.get(session_id)
        assert session is not None
        assert session.title == "Explain the budget table"

    def test_does_not_rename_document_session(self, store: SessionStore) -> None:
        session_id = store.create()
        store.attach_document(session_id, {"chunks": 1}, "report.pdf")

        store.append_message(session_id, Message.user("Hello"))

        session = store.get(session_id)
        assert session is not None
        assert session.title == "PDF: report.pdf"

    def test_earlier_reads_are_unchanged(self, store: SessionStore) -> None:
        session_id = store.create()
        before = store.get(session_id)

        store.append_message(session_id, Message.user("hi"))

        assert before is not None
        assert before.messages == []

    def test_persists(self, store: SessionStore, kv: MappingKeyValueStore) -> None:
        session_id = store.create()

        store.append_message(session_id, Message.user("hello"))

        [persisted] = _persisted(kv)
        assert [m["content"] for m in persisted["messages"]] == ["hello"]


class TestAttachDocument:
    def test_sets_payload_title_and_one_system_message(self, store: SessionStore) -> None:
        session_id = store.create()
        store.append_message(session_id, Message.user("before upload"))
        before = store.get(session_id)
        assert before is not None

        store.attach_document(session_id, {"chunks": 3}, "paper.pdf")

        session = store.get(session_id)
        assert session is not None
        check.equal(session.processed_document, {"chunks": 3})
        check.is_in("paper.pdf", session.title)
        check.equal(session.messages[:-1], before.messages)
        check.equal(len(session.messages), len(before.messages) + 1)
        check.equal(session.messages[-1].sender, Sender.SYSTEM)
        check.is_in("paper.pdf", session.messages[-1].content)

    def test_second_upload_replaces_document(self, store: SessionStore) -> None:
        session_id = store.create()

        store.attach_document(session_id, {"chunks": 3}, "first.pdf")
        store.attach_document(session_id, {"chunks": 7}, "second.pdf")

        session = store.get(session_id)
        assert session is not None
        check.equal(session.processed_document, {"chunks": 7})
        check.equal(session.title, "PDF: second.pdf")
        check.equal(len(session.messages), 2)

    def test_non_object_payload_survives_reload(
        self, store: SessionStore, kv: MappingKeyValueStore
    ) -> None:
        session_id = store.create()
        store.attach_document(session_id, ["chunk-1", "chunk-2"], "paper.pdf")

        reloaded = SessionStore(kv)
        reloaded.load()

        session = reloaded.get(session_id)
        assert session is not None
        check.equal(session.processed_document, ["chunk-1", "chunk-2"])
        check.is_true(session.has_document)

    def test_missing_session_is_noop(self, store: SessionStore) -> None:
        store.attach_document("missing", {"chunks": 1}, "x.pdf")

        assert store.sessions == []

    def test_persists_in_single_write(self, store: SessionStore) -> None:
        writes: list[str] = []

        class RecordingStore(MappingKeyValueStore):
            def set(self, key: str, value: str) -> None:
                writes.append(value)
                super().set(key, value)

        recording = SessionStore(RecordingStore())
        session_id = recording.create()
        writes.clear()

        recording.attach_document(session_id, {"chunks": 3}, "a.pdf")

        assert len(writes) == 1
        [persisted] = json.loads(writes[0])
        check.equal(persisted["processedDocument"], {"chunks": 3})
        check.equal(persisted["title"], "PDF: a.pdf")
        check.equal(len(persisted["messages"]), 1)


class TestReload:
    def test_state_survives_reload(self, store: SessionStore, kv: MappingKeyValueStore) -> None:
        session_id = store.create()
        store.attach_document(session_id, {"chunks": 3}, "a.pdf")
        store.append_message(session_id, Message.user("q"))
        store.append_message(session_id, Message.ai("a"))

        reloaded = SessionStore(kv)
        reloaded.load()

        assert reloaded.sessions == store.sessions
        assert reloaded.active_id is None
