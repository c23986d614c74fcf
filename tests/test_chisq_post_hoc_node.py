import unittest

import pandas as pd
import knime.extension as knext
import knime.extension.testing as ktest

from src.chisq_post_hoc_node import ChiSquarePostHocNode


class TestChiSquarePostHocNode(unittest.TestCase):
    """Runs the node end to end on the sex-by-location counts."""

    def setUp(self):
        self.input_df = pd.DataFrame(
            {
                "Sex": ["Male", "Female", "Juv"],
                "Lower": [76, 48, 45],
                "Middle": [32, 23, 34],
                "Upper": [46, 47, 78],
            }
        )

    def _execute(self, node, df):
        exec_context = ktest.TestingExecutionContext()
        output_table = node.execute(exec_context, knext.Table.from_pandas(df))
        return output_table.to_pandas()

    def test_configure_output_schema(self):
        schema = knext.Schema.from_columns(
            [
                knext.Column(knext.string(), "Sex"),
                knext.Column(knext.int64(), "Lower"),
                knext.Column(knext.int64(), "Middle"),
                knext.Column(knext.int64(), "Upper"),
            ]
        )

        node = ChiSquarePostHocNode()
        output_schema = node.configure(ktest.TestingConfigurationContext(), schema)

        self.assertEqual(
            output_schema.column_names,
            [
                "Comparison",
                "Test Method",
                "Correction Method",
                "Raw P-Value",
                "Adjusted P-Value",
                "Cramer's V",
                "Difference is Significant?",
            ],
        )

    def test_execute_defaults(self):
        node = ChiSquarePostHocNode()
        node.label_column = "Sex"

        output_df = self._execute(node, self.input_df)

        self.assertEqual(list(output_df["Comparison"]), ["Male vs. Female", "Male vs. Juv", "Female vs. Juv"])
        self.assertTrue((output_df["Test Method"] == "Chi-Square").all())
        self.assertTrue((output_df["Correction Method"] == "FDR (Benjamini-Hochberg)").all())
        self.assertTrue((output_df["Adjusted P-Value"] >= output_df["Raw P-Value"]).all())
        self.assertEqual(output_df.loc[output_df["Comparison"] == "Male vs. Juv", "Difference is Significant?"].iloc[0], "Yes")

    def test_execute_populations_in_columns(self):
        node = ChiSquarePostHocNode()
        node.label_column = "Sex"
        node.pops_in_rows = False
        node.pairwise_test = "FISHER_EXACT"
        node.correction_method = "HOLM"

        output_df = self._execute(node, self.input_df)

        self.assertEqual(list(output_df["Comparison"]), ["Lower vs. Middle", "Lower vs. Upper", "Middle vs. Upper"])
        self.assertTrue((output_df["Test Method"] == "Fisher's Exact").all())
        self.assertTrue((output_df["Correction Method"] == "Holm").all())

    def test_execute_missing_label_column(self):
        node = ChiSquarePostHocNode()
        node.label_column = "Location"

        with self.assertRaisesRegex(ValueError, "Data validation failed"):
            self._execute(node, self.input_df)

    def test_execute_negative_counts(self):
        node = ChiSquarePostHocNode()
        node.label_column = "Sex"
        df = self.input_df.copy()
        df.loc[1, "Middle"] = -3

        with self.assertRaisesRegex(ValueError, "Data validation failed: .*negative"):
            self._execute(node, df)

    def test_execute_duplicate_labels(self):
        node = ChiSquarePostHocNode()
        node.label_column = "Sex"
        df = self.input_df.copy()
        df.loc[2, "Sex"] = "Male"

        with self.assertRaisesRegex(ValueError, "duplicate labels"):
            self._execute(node, df)


if __name__ == "__main__":
    unittest.main()
