import unittest

from plansync.errors import InvalidArgumentError
from plansync.models import TABLE_SPECS, Achievement, DailyPlan, SpecialNote, Table


class TestRecords(unittest.TestCase):
    def test_defaults(self) -> None:
        a = Achievement(id="1", title="Run 5k")
        self.assertEqual(a.status, "planned")
        self.assertEqual(a.progress, 0)
        self.assertEqual(a.sync_state, "pending")
        self.assertIsNone(a.created_at)

    def test_to_row_strips_local_only_fields(self) -> None:
        note = SpecialNote(id="n1", content="hello", sync_state="reconciled")
        self.assertIn("sync_state", note.to_dict())
        row = note.to_row()
        self.assertNotIn("sync_state", row)
        self.assertEqual(row["content"], "hello")
        self.assertEqual(row["id"], "n1")

    def test_from_dict_lenient_ignores_unknown_columns(self) -> None:
        plan = DailyPlan.from_dict({"id": "p1", "day": "Mon", "user_id": "u-9"})
        self.assertEqual(plan.id, "p1")
        self.assertEqual(plan.day, "Mon")
        self.assertFalse(hasattr(plan, "user_id"))

    def test_from_dict_lenient_null_column_uses_default(self) -> None:
        a = Achievement.from_dict(
            {"id": "1", "title": None, "progress": None, "status": None, "created_at": None}
        )
        self.assertEqual((a.title, a.progress, a.status), ("", 0, "planned"))
        self.assertIsNone(a.created_at)
        a.validate()

    def test_from_dict_strict_keeps_null_and_rejects_it(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            SpecialNote.from_dict({"id": "n1", "content": None}, strict=True)

    def test_from_dict_strict_rejects_unknown_fields(self) -> None:
        with self.assertRaises(InvalidArgumentError) as ctx:
            SpecialNote.from_dict({"content": "x", "colour": "red"}, strict=True)
        self.assertEqual(ctx.exception.details["unknown"], ["colour"])

    def test_from_dict_strict_validates_values(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            Achievement.from_dict({"title": "x", "progress": 150}, strict=True)
        with self.assertRaises(InvalidArgumentError):
            Achievement.from_dict({"title": "x", "status": "done"}, strict=True)
        with self.assertRaises(InvalidArgumentError):
            Achievement.from_dict({"title": "x", "progress": True}, strict=True)
        with self.assertRaises(InvalidArgumentError):
            SpecialNote.from_dict({"content": 42}, strict=True)

    def test_from_dict_rejects_non_mapping(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            DailyPlan.from_dict(["not", "a", "mapping"])  # type: ignore[arg-type]

    def test_replace_returns_new_record(self) -> None:
        note = SpecialNote(id="n1", content="a")
        changed = note.replace(content="b")
        self.assertEqual(note.content, "a")
        self.assertEqual(changed.content, "b")
        self.assertEqual(changed.id, "n1")

    def test_table_specs(self) -> None:
        self.assertEqual(TABLE_SPECS[Table.DAILY_PLANS].order_by, "date")
        self.assertEqual(TABLE_SPECS[Table.ACHIEVEMENTS].order_by, "date")
        self.assertEqual(TABLE_SPECS[Table.SPECIAL_NOTES].order_by, "created_at")
        self.assertIs(TABLE_SPECS[Table.ACHIEVEMENTS].record_cls, Achievement)


if __name__ == "__main__":
    unittest.main()
