import unittest

from modules.models import DAYS, OperationRecord, WeeklyMetric, WorkerRecord
from tests.helpers import make_operation


class WeeklyMetricTests(unittest.TestCase):

    def test_always_seven_days(self):
        metric = WeeklyMetric({"mon": 3})
        self.assertEqual(len(metric), 7)
        self.assertEqual(list(metric), list(DAYS))
        self.assertEqual(metric["mon"], 3)
        self.assertEqual(metric["sun"], 0)

    def test_from_values_pads_with_default(self):
        metric = WeeklyMetric.from_values(["8:00", "7:30"], default="0:00")
        self.assertEqual(metric.values(), ["8:00", "7:30"] + ["0:00"] * 5)

    def test_unknown_day_rejected(self):
        with self.assertRaises(KeyError):
            WeeklyMetric({"lunes": 1})
        metric = WeeklyMetric.filled(0)
        with self.assertRaises(KeyError):
            metric["holiday"] = 2

    def test_copy_is_independent(self):
        metric = WeeklyMetric.filled(1)
        clone = metric.copy()
        clone["tue"] = 5
        self.assertEqual(metric["tue"], 1)
        self.assertEqual(clone, {**metric.to_dict(), "tue": 5})


class OperationRecordTests(unittest.TestCase):

    def test_real_operation_with_production(self):
        self.assertTrue(make_operation(meta=None, mon=5).is_real_operation())

    def test_real_operation_with_meta_only(self):
        self.assertTrue(make_operation(meta=80).is_real_operation())

    def test_without_meta_or_production(self):
        self.assertFalse(make_operation(meta=0).is_real_operation())
        self.assertFalse(make_operation(meta=None).is_real_operation())

    def test_reserved_labels_excluded(self):
        for name in ["Total", "TOTAL SEMANA", "Operación", "Estilo", "Orden", "Meta diaria"]:
            self.assertFalse(make_operation(name=name, mon=40).is_real_operation(), name)

    def test_empty_name_excluded(self):
        self.assertFalse(make_operation(name="  ", mon=40).is_real_operation())

    def test_defaults(self):
        op = OperationRecord(name="Ruedo")
        self.assertIsNone(op.meta)
        self.assertIsNone(op.total)
        self.assertEqual(op.price_per_piece, 0.0)
        self.assertEqual(op.daily_production.values(), [0] * 7)


class WorkerRecordTests(unittest.TestCase):

    def test_defaults(self):
        worker = WorkerRecord(id="7", name="Luis")
        self.assertEqual(worker.hours_worked.values(), ["0:00"] * 7)
        self.assertEqual(worker.inactive_hours.values(), ["0:00"] * 7)
        self.assertEqual(worker.efficiency.values(), [0] * 7)
        self.assertIsNone(worker.bonus)
        self.assertEqual(worker.label, "7 / Luis")

    def test_real_operations_keeps_order(self):
        worker = WorkerRecord(id="7", name="Luis", operations=[
            make_operation(name="Cerrar", mon=1),
            make_operation(name="Total", mon=1),
            make_operation(name="Pegar", tue=2),
        ])
        self.assertEqual([op.name for op in worker.real_operations()], ["Cerrar", "Pegar"])
