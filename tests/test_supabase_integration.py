import os
import tempfile
import unittest

from plansync import Settings, SyncCoordinator, Table
from plansync.controller import RemoteClient


def _has_env() -> bool:
    return bool(
        os.environ.get("PLANSYNC_SUPABASE_URL", "").strip()
        and os.environ.get("PLANSYNC_SUPABASE_ANON_KEY", "").strip()
    )


@unittest.skipUnless(_has_env(), "Supabase credentials not configured")
class TestSupabaseIntegration(unittest.TestCase):
    """
    Integration test against a real Supabase project.

    Required env vars:
        - PLANSYNC_SUPABASE_URL: project URL
        - PLANSYNC_SUPABASE_ANON_KEY: anon key with insert/update/delete on
          special_notes (use a sandbox project)
    """

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        env = dict(os.environ)
        env["PLANSYNC_DATA_DIR"] = self._tmp.name
        self.settings = Settings.from_env(env)
        self.coord = SyncCoordinator.from_settings(self.settings)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_note_lifecycle_smoke(self) -> None:
        self.assertTrue(self.coord.is_reachable())

        note = self.coord.notes.create({"content": "plansync integration test"})
        self.assertEqual(note.sync_state, "reconciled")

        self.coord.notes.update(note.replace(content="plansync integration test (edited)"))
        ids = [n.id for n in self.coord.notes.get_all()]
        self.assertIn(note.id, ids)

        self.coord.notes.delete(note.id)
        self.assertTrue(self.coord.sync_now())
        self.assertEqual(self.coord.pending_operations(), [])

        remote = RemoteClient(self.settings)
        rows = remote.fetch_all_or_raise(Table.SPECIAL_NOTES, "created_at")
        self.assertNotIn(note.id, [r.get("id") for r in rows])


if __name__ == "__main__":
    unittest.main()
