import pytest
import sys
from pathlib import Path

# Add the repository root to the Python path
root_path = str(Path(__file__).parent.parent)
if root_path not in sys.path:
    sys.path.insert(0, root_path)

from tests.utils.test_logger import create_test_logger


@pytest.fixture
def logger():
    return create_test_logger()
