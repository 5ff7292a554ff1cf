import unittest
from unittest.mock import MagicMock, patch

from firebase_admin import exceptions

from shared.snapshot_store import InMemorySnapshotStore, RealtimeDbSnapshotStore


class InMemorySnapshotStoreTests(unittest.TestCase):
    def test_listener_receives_current_and_new_values(self):
        store = InMemorySnapshotStore()
        store.set("a/b", {"data": 1})
        received = []

        subscription = store.listen("a/b", received.append, MagicMock())
        store.set("a/b", {"data": 2})
        store.set("other", {"data": 3})
        subscription.close()
        store.set("a/b", {"data": 4})

        self.assertEqual(received, [{"data": 1}, {"data": 2}])

    def test_instances_do_not_share_values(self):
        first = InMemorySnapshotStore()
        second = InMemorySnapshotStore()

        first.set("a", {"data": 1})

        self.assertEqual(second.values, {})
        self.assertIsNone(second.get("a"))

    def test_values_are_copied(self):
        store = InMemorySnapshotStore()
        value = {"data": {"nested": [1]}}
        store.set("a", value)

        value["data"]["nested"].append(2)
        store.get("a")["data"]["nested"].append(3)

        self.assertEqual(store.get("a"), {"data": {"nested": [1]}})

    def test_delete_notifies_none(self):
        store = InMemorySnapshotStore()
        store.set("a", {"data": 1})
        received = []
        store.listen("a", received.append, MagicMock())

        store.delete("a")

        self.assertEqual(received, [{"data": 1}, None])
        self.assertIsNone(store.get("a"))

    def test_fail_reports_error(self):
        store = InMemorySnapshotStore()
        on_error = MagicMock()
        store.listen("a", MagicMock(), on_error)
        error = RuntimeError("boom")

        store.fail("a", error)

        on_error.assert_called_once_with(error)


class RealtimeDbSnapshotStoreTests(unittest.TestCase):
    def setUp(self):
        self.app = MagicMock()
        self.store = RealtimeDbSnapshotStore(app=self.app)

    @patch("shared.snapshot_store.db")
    def test_set_overwrites_reference(self, mock_db):
        self.store.set("powerlifting/user_data", {"data": 1})

        mock_db.reference.assert_called_once_with("powerlifting/user_data", app=self.app)
        mock_db.reference.return_value.set.assert_called_once_with({"data": 1})

    @patch("shared.snapshot_store.db")
    def test_listen_root_put_delivers_event_data(self, mock_db):
        reference = mock_db.reference.return_value
        on_value = MagicMock()

        subscription = self.store.listen("p", on_value, MagicMock())
        callback = reference.listen.call_args.args[0]
        callback(MagicMock(event_type="put", path="/", data={"data": 1}))

        on_value.assert_called_once_with({"data": 1})
        reference.get.assert_not_called()
        self.assertIs(subscription, reference.listen.return_value)

    @patch("shared.snapshot_store.db")
    def test_listen_partial_update_rereads_record(self, mock_db):
        reference = mock_db.reference.return_value
        reference.get.return_value = {"data": 2, "lastUpdated": "now"}
        on_value = MagicMock()

        self.store.listen("p", on_value, MagicMock())
        callback = reference.listen.call_args.args[0]
        callback(MagicMock(event_type="patch", path="/data", data=2))

        on_value.assert_called_once_with({"data": 2, "lastUpdated": "now"})

    @patch("shared.snapshot_store.db")
    def test_listen_failure_reports_error(self, mock_db):
        error = exceptions.UnavailableError("database unavailable")
        mock_db.reference.return_value.listen.side_effect = error
        on_error = MagicMock()

        subscription = self.store.listen("p", MagicMock(), on_error)

        on_error.assert_called_once_with(error)
        subscription.close()

    @patch("shared.snapshot_store.db")
    def test_reread_failure_reports_error(self, mock_db):
        reference = mock_db.reference.return_value
        error = exceptions.PermissionDeniedError("denied")
        reference.get.side_effect = error
        on_value = MagicMock()
        on_error = MagicMock()

        self.store.listen("p", on_value, on_error)
        callback = reference.listen.call_args.args[0]
        callback(MagicMock(event_type="put", path="/data", data=1))

        on_value.assert_not_called()
        on_error.assert_called_once_with(error)


if __name__ == "__main__":
    unittest.main()
