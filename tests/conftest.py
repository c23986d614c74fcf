# Ensure repository root is on sys.path so `import src` works regardless of pytest's cwd/import mode
import os
import sys

import pandas as pd
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture
def sex_location_table():
    """Counts of individuals by sex (rows) and river location (columns)."""
    return pd.DataFrame(
        [[76, 32, 46], [48, 23, 47], [45, 34, 78]],
        index=["Male", "Female", "Juv"],
        columns=["Lower", "Middle", "Upper"],
    )


@pytest.fixture
def notices():
    """Collects notices emitted by the post-hoc engine."""
    return []
