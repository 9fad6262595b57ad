import sys
from pathlib import Path

import pytest
import QuantLib as ql

# Ensure the project root is on sys.path when tests are executed
# via the `pytest` entry script.
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _quantlib_globals():
    """Restore the evaluation date and drop index fixings after each test."""
    settings = ql.Settings.instance()
    evaluation_date = settings.evaluationDate
    yield
    settings.evaluationDate = evaluation_date
    ql.IndexManager.instance().clearHistories()
