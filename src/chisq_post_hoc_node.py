"""
Chi-Square Post-Hoc Node for KNIME.

This module provides a KNIME node that takes a contingency table of counts and
tests every pair of populations (chi-square or Fisher's exact), adjusting the
pairwise p-values for multiple comparisons and reporting Cramer's V.
"""

import logging

import knime.extension as knext
from .chisq_post_hoc import (
    run_chisq_post_hoc,
    format_post_hoc_results_for_knime,
    validate_count_columns,
    validate_contingency_table,
    pairwise_test_param,
    correction_method_param,
    label_column_param,
    pops_in_rows_param,
    digits_param,
    alpha_param,
    PairwiseTestType,
    CorrectionMethodType,
    STRATEGY_NAMES,
    CORRECTION_NAMES,
)

LOGGER = logging.getLogger(__name__)


post_hoc_category = knext.category(
    path="/community",
    level_id="utd_development",
    name="University of Texas at Dallas Development",
    description="Statistical Chi-Square Post-Hoc Testing Node",
    icon="./icons/utd.png",
)


@knext.node(
    name="Chi-Square Post-Hoc Comparisons",
    node_type=knext.NodeType.MANIPULATOR,
    icon_path="./icons/post_hoc.png",
    category=post_hoc_category,
)
@knext.input_table(
    name="Contingency Table",
    description="One string label column and numeric count columns. Each row is a population unless populations are in columns.",
)
@knext.output_table(
    name="Pairwise Comparisons",
    description="Raw and adjusted p-values with Cramer's V for every pair of populations.",
)
class ChiSquarePostHocNode:
    label_column = label_column_param
    pairwise_test = pairwise_test_param
    pops_in_rows = pops_in_rows_param
    correction_method = correction_method_param
    digits = digits_param
    alpha = alpha_param

    def configure(self, cfg_ctx, input_spec):
        """Configure the pairwise comparisons output schema."""
        return knext.Schema.from_columns(
            [
                knext.Column(knext.string(), "Comparison"),
                knext.Column(knext.string(), "Test Method"),
                knext.Column(knext.string(), "Correction Method"),
                knext.Column(knext.double(), "Raw P-Value"),
                knext.Column(knext.double(), "Adjusted P-Value"),
                knext.Column(knext.double(), "Cramer's V"),
                knext.Column(knext.string(), "Difference is Significant?"),
            ]
        )

    def execute(self, exec_ctx, input_table):
        """Build the contingency table and run all pairwise comparisons."""
        df = input_table.to_pandas()

        try:
            label_col, count_cols = validate_count_columns(df, self.label_column)
            counts = validate_contingency_table(df.set_index(label_col)[count_cols])
        except ValueError as e:
            raise ValueError(f"Data validation failed: {str(e)}")

        results_df = run_chisq_post_hoc(
            counts,
            test=STRATEGY_NAMES[self.pairwise_test],
            pops_in_rows=self.pops_in_rows,
            control=CORRECTION_NAMES[self.correction_method],
            digits=self.digits,
            notify=LOGGER.info,
        )

        pairwise_df = format_post_hoc_results_for_knime(
            results_df,
            test_method=PairwiseTestType[self.pairwise_test].value[0],
            correction_method=CorrectionMethodType[self.correction_method].value[0],
            alpha=self.alpha,
        )

        return knext.Table.from_pandas(pairwise_df)
