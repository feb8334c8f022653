import unittest
import uuid

from plansync.util.ids import new_op_id, new_record_id, new_uuid


class TestUtilIds(unittest.TestCase):
    def test_new_uuid_is_valid_uuid4(self) -> None:
        value = new_uuid()
        parsed = uuid.UUID(value)
        self.assertEqual(str(parsed), value)
        self.assertEqual(parsed.version, 4)

    def test_new_op_id_is_valid_uuid4(self) -> None:
        parsed = uuid.UUID(new_op_id())
        self.assertEqual(parsed.version, 4)

    def test_new_record_id_is_millisecond_token(self) -> None:
        value = new_record_id()
        self.assertTrue(value.isdigit())
        # epoch milliseconds: 13 digits until the year 2286
        self.assertEqual(len(value), 13)

    def test_new_record_ids_strictly_increase(self) -> None:
        values = [int(new_record_id()) for _ in range(50)]
        self.assertEqual(values, sorted(values))
        self.assertEqual(len(set(values)), 50)


if __name__ == "__main__":
    unittest.main()
