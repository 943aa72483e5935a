import unittest
from unittest.mock import patch

from sqlalchemy import exc as sa_exc

from aster_backend.errors import StoreError, StoreNotFound, StoreUnavailable, StoreWriteError
from aster_backend.repository import ContentRepository, FetchOutcome
from aster_backend.store import SqlDocumentStore
from aster_shared.types import InquiryStatus, ServicePackage


class SqlDocumentStoreTests(unittest.TestCase):
    """
    Uses SQLite via SQLAlchemy URL for fast/local testing of the SQL store.
    """

    def setUp(self):
        self.store = SqlDocumentStore("sqlite+pysqlite:///:memory:")

    def test_set_and_get(self):
        self.store.set("settings", "global", {"brandName": "Aster"})
        self.assertEqual(self.store.get("settings", "global"), {"brandName": "Aster"})
        self.assertIsNone(self.store.get("settings", "other"))

    def test_list_injects_ids_in_insertion_order(self):
        self.store.set("projects", "b", {"title": "B"})
        self.store.set("projects", "a", {"title": "A"})
        self.store.set("blogs", "x", {"title": "X"})
        docs = self.store.list("projects")
        self.assertEqual([d["id"] for d in docs], ["b", "a"])
        self.assertEqual(docs[0]["title"], "B")

    def test_list_keeps_insertion_order_within_one_clock_tick(self):
        with patch("aster_backend.store.time.time", return_value=1_700_000_000.0):
            ids = [self.store.add("inquiries", {"name": name}) for name in "ABCDE"]
        docs = self.store.list("inquiries")
        self.assertEqual([d["id"] for d in docs], ids)
        self.assertEqual([d["name"] for d in docs], list("ABCDE"))

    def test_overwrite_keeps_list_position(self):
        self.store.set("projects", "p1", {"title": "One"})
        self.store.set("projects", "p2", {"title": "Two"})
        self.store.set("projects", "p1", {"title": "One again"})
        self.assertEqual([d["id"] for d in self.store.list("projects")], ["p1", "p2"])

    def test_set_overwrites(self):
        self.store.set("projects", "p1", {"title": "Old", "location": "Bali"})
        self.store.set("projects", "p1", {"title": "New"})
        self.assertEqual(self.store.get("projects", "p1"), {"title": "New"})
        self.assertEqual(len(self.store.list("projects")), 1)

    def test_update_merges_fields(self):
        self.store.set("inquiries", "i1", {"name": "A", "status": "new"})
        self.store.update("inquiries", "i1", {"status": "closed"})
        self.assertEqual(
            self.store.get("inquiries", "i1"), {"name": "A", "status": "closed"}
        )

    def test_update_missing_raises_not_found(self):
        with self.assertRaises(StoreNotFound):
            self.store.update("inquiries", "nope", {"status": "closed"})

    def test_delete_and_add(self):
        doc_id = self.store.add("inquiries", {"name": "A"})
        self.assertEqual(self.store.get("inquiries", doc_id), {"name": "A"})
        self.store.delete("inquiries", doc_id)
        self.store.delete("inquiries", doc_id)
        self.assertIsNone(self.store.get("inquiries", doc_id))

    def test_operational_error_is_unavailable(self):
        error = sa_exc.OperationalError("SELECT 1", {}, Exception("connection refused"))
        with patch.object(self.store, "Session", side_effect=error):
            with self.assertRaises(StoreUnavailable):
                self.store.list("packages")

    def test_other_sqlalchemy_error_is_store_error(self):
        with patch.object(self.store, "Session", side_effect=sa_exc.NoResultFound()):
            with self.assertRaises(StoreError):
                self.store.get("packages", "1")

    def test_requires_url(self):
        with self.assertRaises(ValueError):
            SqlDocumentStore("")


class SqlRepositoryTests(unittest.TestCase):
    def setUp(self):
        self.repo = ContentRepository(SqlDocumentStore("sqlite+pysqlite:///:memory:"))

    def test_live_packages_round_trip(self):
        self.repo.save_package(ServicePackage(id="2", name="Second", order=2))
        self.repo.save_package(ServicePackage(id="1", name="First", order=1))
        result = self.repo.get_packages()
        self.assertEqual(result.outcome, FetchOutcome.SUCCESS_NONEMPTY)
        self.assertEqual([p.name for p in result.data], ["First", "Second"])

    def test_inquiry_lifecycle(self):
        inquiry = self.repo.submit_inquiry({"name": "Rina", "email": "rina@example.com"})
        self.repo.update_inquiry_status(inquiry.id, InquiryStatus.CONTACTED)
        stored = self.repo.get_inquiries().data
        self.assertEqual(len(stored), 1)
        self.assertEqual(stored[0].status, InquiryStatus.CONTACTED)

    def test_status_update_on_missing_inquiry(self):
        with self.assertRaises(StoreWriteError):
            self.repo.update_inquiry_status("x1", InquiryStatus.CLOSED)


if __name__ == "__main__":
    unittest.main()
