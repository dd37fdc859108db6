import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from shiritori_search.core import SearchContext, build_index

SAMPLE_WORDS = ["ねこ", "こい", "いぬ", "ぬま"]


@pytest.fixture
def sample_index():
    """The four-word collection ねこ → こい → いぬ → ぬま."""

    return build_index(SAMPLE_WORDS, name="animals")


@pytest.fixture
def sample_context():
    return SearchContext.from_collections({"animals": SAMPLE_WORDS})

