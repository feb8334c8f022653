import unittest

import plansync


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(plansync, "SyncCoordinator"))
        self.assertTrue(hasattr(plansync, "Settings"))
        self.assertTrue(hasattr(plansync, "LocalStore"))
        self.assertTrue(hasattr(plansync, "PendingQueue"))
        self.assertTrue(hasattr(plansync, "RemoteClient"))
        self.assertTrue(hasattr(plansync, "ConnectivityProbe"))

        self.assertTrue(hasattr(plansync, "SyncOperation"))
        self.assertTrue(hasattr(plansync, "SpecialNote"))
        self.assertTrue(hasattr(plansync, "SyncStatus"))

        self.assertTrue(hasattr(plansync, "PlanSyncError"))
        self.assertTrue(hasattr(plansync, "LocalPersistenceError"))

    def test___all___is_defined(self) -> None:
        self.assertTrue(hasattr(plansync, "__all__"))
        self.assertIn("SyncCoordinator", plansync.__all__)
        self.assertIn("PlanSyncError", plansync.__all__)
        for name in plansync.__all__:
            self.assertTrue(hasattr(plansync, name), name)


if __name__ == "__main__":
    unittest.main()
