import knime.extension as knext
import numpy as np
import pandas as pd


def is_string(col: knext.Column) -> bool:
    """Helper function to filter for string columns."""
    return col.ktype == knext.string()


# Test strategy enumeration
class PairwiseTestType(knext.EnumParameterOptions):
    CHI_SQUARE = (
        "Chi-Square",
        "Pearson's chi-square test of independence on each pair of populations (Yates-corrected for 2x2 tables).",
    )
    FISHER_EXACT = (
        "Fisher's Exact",
        "Fisher's exact test on each pair of populations - preferred when expected cell counts are small.",
    )


# Correction method enumeration
class CorrectionMethodType(knext.EnumParameterOptions):
    FDR = (
        "FDR (Benjamini-Hochberg)",
        "Controls the false discovery rate assuming independent or positively dependent tests.",
    )
    BY = (
        "FDR (Benjamini-Yekutieli)",
        "Controls the false discovery rate under arbitrary dependence - more conservative than Benjamini-Hochberg.",
    )
    BONFERRONI = (
        "Bonferroni",
        "Multiplies each p-value by the number of comparisons - the most conservative family-wise correction.",
    )
    HOLM = (
        "Holm",
        "Sequential step-down Bonferroni correction controlling the family-wise error rate.",
    )
    HOCHBERG = (
        "Hochberg",
        "Step-up family-wise correction, valid for independent or positively dependent tests.",
    )
    HOMMEL = (
        "Hommel",
        "Closed-testing family-wise correction, more powerful than Hochberg.",
    )


# Node enum names mapped to engine selector names
STRATEGY_NAMES = {
    PairwiseTestType.CHI_SQUARE.name: "chisq.test",
    PairwiseTestType.FISHER_EXACT.name: "fisher.test",
}

CORRECTION_NAMES = {
    CorrectionMethodType.FDR.name: "fdr",
    CorrectionMethodType.BY.name: "BY",
    CorrectionMethodType.BONFERRONI.name: "bonferroni",
    CorrectionMethodType.HOLM.name: "holm",
    CorrectionMethodType.HOCHBERG.name: "hochberg",
    CorrectionMethodType.HOMMEL.name: "hommel",
}


# Individual parameters
pairwise_test_param = knext.EnumParameter(
    label="Pairwise Test",
    description="Test run on the sub-table of every pair of populations.",
    enum=PairwiseTestType,
    default_value=PairwiseTestType.CHI_SQUARE.name,
)

correction_method_param = knext.EnumParameter(
    label="P-Value Correction",
    description="Multiple-comparison correction applied across all pairwise p-values.",
    enum=CorrectionMethodType,
    default_value=CorrectionMethodType.FDR.name,
)

label_column_param = knext.ColumnParameter(
    label="Label Column",
    description="String column naming each row of the contingency table.",
    column_filter=is_string,
)

pops_in_rows_param = knext.BoolParameter(
    label="Populations in Rows",
    description="Compare rows as populations. Disable to compare the count columns instead.",
    default_value=True,
)

digits_param = knext.IntParameter(
    label="Decimal Digits",
    description="Number of decimal digits kept in p-values and Cramer's V (default: 4)",
    default_value=4,
    min_value=0,
    max_value=15,
)

alpha_param = knext.DoubleParameter(
    label="Significance Level (α)",
    description="Significance level for flagging adjusted p-values (default: 0.05)",
    default_value=0.05,
    min_value=0.001,
    max_value=0.999,
)


def validate_contingency_table(table) -> pd.DataFrame:
    # Coerce to a DataFrame of counts, keeping row/column names when present
    if isinstance(table, pd.DataFrame):
        df = table.copy()
    else:
        values = np.asarray(table)
        if values.ndim != 2:
            raise ValueError(f"Contingency table must be two-dimensional, got {values.ndim} dimension(s).")
        df = pd.DataFrame(
            values,
            index=[str(i + 1) for i in range(values.shape[0])],
            columns=[str(j + 1) for j in range(values.shape[1])],
        )

    non_numeric = [col for col in df.columns if not pd.api.types.is_numeric_dtype(df[col])]
    if non_numeric:
        raise ValueError(f"Contingency table has non-numeric columns: {non_numeric}")

    values = df.to_numpy(dtype=float)
    if not np.all(np.isfinite(values)):
        raise ValueError("Contingency table contains missing or infinite counts.")
    if np.any(values < 0):
        raise ValueError("Contingency table contains negative counts.")
    if not np.all(values == np.round(values)):
        raise ValueError("Contingency table counts must be whole numbers.")

    return df.astype(np.int64)


def validate_count_columns(df, label_col):
    # Check the label column and return (label column, numeric count columns)
    if label_col is None:
        raise ValueError("No label column selected. Please configure the node and select a string label column.")
    if label_col not in df.columns:
        raise ValueError(f"Label column '{label_col}' not found in data.")

    count_cols = [col for col in df.columns if col != label_col and pd.api.types.is_numeric_dtype(df[col])]
    if len(count_cols) < 2:
        raise ValueError(f"Found only {len(count_cols)} numeric count columns. A contingency table needs at least 2.")

    labels = df[label_col]
    if labels.isna().any():
        raise ValueError("Label column contains missing values.")
    duplicated = labels[labels.duplicated()].unique().tolist()
    if duplicated:
        raise ValueError(f"Label column contains duplicate labels: {duplicated}")

    return label_col, count_cols
