import unittest

import pandas as pd

from cell_value import CellKind
from data_model import DataModel
from errors import IndexOutOfRange, ShapeMismatch


class DataModelLoadTests(unittest.TestCase):
    def test_load_counts_rows_and_columns(self):
        model = DataModel.load([["Bob", "30"], ["Amy", "25"]], ["Name", "Age"])
        self.assertEqual(model.column_count, 2)
        self.assertEqual(model.row_count, 2)
        self.assertEqual(model.header_titles, ("Name", "Age"))
        self.assertEqual(model.cell(1, 0).value, "Amy")

    def test_row_length_mismatch_raises(self):
        with self.assertRaises(ShapeMismatch) as ctx:
            DataModel.load([["Bob", "30"], ["Amy"]], ["Name", "Age"])
        self.assertEqual(ctx.exception.row_index, 1)
        self.assertEqual(ctx.exception.expected, 2)
        self.assertEqual(ctx.exception.actual, 1)
        self.assertIsInstance(ctx.exception, ValueError)

    def test_footer_length_must_match_headers(self):
        with self.assertRaises(ShapeMismatch):
            DataModel.load([["a", "b"]], ["A", "B"], footer_titles=["only one"])

    def test_footers_are_kept(self):
        model = DataModel.load([["a", "b"]], ["A", "B"], footer_titles=["fa", "fb"])
        self.assertEqual(model.footer_titles, ("fa", "fb"))

    def test_from_dataframe_tags_cells(self):
        df = pd.DataFrame({"n": [1, 2], "s": ["x", None]})
        model = DataModel.from_dataframe(df)
        self.assertEqual(model.cell(0, 0).kind, CellKind.INTEGER)
        self.assertEqual(model.cell(1, 1).kind, CellKind.NIL)

    def test_column_is_mixed_looks_at_every_row(self):
        model = DataModel.load([[10, "a"], [9, None], ["x", "b"]], ["N", "S"])
        self.assertTrue(model.column_is_mixed(0))
        self.assertFalse(model.column_is_mixed(1))
        with self.assertRaises(IndexOutOfRange):
            model.column_is_mixed(2)

    def test_column_index_lookup(self):
        model = DataModel.load([], ["Name", "Age"])
        self.assertEqual(model.column_index("Age"), 1)
        self.assertIsNone(model.column_index("Missing"))


class DataModelStatisticsTests(unittest.TestCase):
    def test_average_content_width_uses_mean_text_length(self):
        model = DataModel.load(
            [["ab"], ["abcd"]], ["Col"], character_width=10.0
        )
        self.assertAlmostEqual(model.average_content_width(0), 30.0)

    def test_average_content_width_counts_nil_as_empty(self):
        model = DataModel.load([["abcd"], [None]], ["Col"], character_width=1.0)
        self.assertAlmostEqual(model.average_content_width(0), 2.0)

    def test_average_content_width_of_empty_dataset_is_zero(self):
        model = DataModel.load([], ["Col"])
        self.assertEqual(model.average_content_width(0), 0.0)

    def test_header_label_width(self):
        model = DataModel.load([], ["Name"], header_character_width=10.0)
        self.assertEqual(model.header_label_width(0), 40.0)

    def test_bad_column_index_raises(self):
        model = DataModel.load([["a"]], ["A"])
        with self.assertRaises(IndexOutOfRange):
            model.average_content_width(1)
        with self.assertRaises(IndexOutOfRange):
            model.cell(0, -1)


if __name__ == "__main__":
    unittest.main()
