import unittest

from plansync.connectivity import ConnectivityProbe
from plansync.models import Table


class _Client:
    def __init__(self, answers) -> None:
        self.answers = list(answers)
        self.calls = []

    def probe(self, table=Table.DAILY_PLANS, *, timeout_sec=None) -> bool:
        self.calls.append((table, timeout_sec))
        answer = self.answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer


class TestConnectivityProbe(unittest.TestCase):
    def test_reprobes_on_every_call(self) -> None:
        client = _Client([True, False, True])
        probe = ConnectivityProbe(client, timeout_sec=3.0)

        self.assertTrue(probe.is_reachable())
        self.assertFalse(probe.is_reachable())
        self.assertTrue(probe.is_reachable())
        self.assertEqual(client.calls, [(Table.DAILY_PLANS, 3.0)] * 3)

    def test_exception_means_unreachable(self) -> None:
        probe = ConnectivityProbe(_Client([RuntimeError("dns")]))
        with self.assertLogs("plansync.connectivity", level="ERROR"):
            self.assertFalse(probe.is_reachable())


if __name__ == "__main__":
    unittest.main()
