import sys
from pathlib import Path

import pytest

# Make the repo root importable when tests run from a plain checkout.
repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from javascript_gen import Context, JsConfig  # noqa: E402


@pytest.fixture
def ctx():
    return Context.fresh(JsConfig(seed=1234))
