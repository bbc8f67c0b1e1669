import sys
import json
from pathlib import Path
import pytest

# Ensure repo root is importable so `import portfolio...` works regardless of pytest import mode.
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

DATA_DIR = ROOT / "data"


@pytest.fixture
def data_dir() -> Path:
    """Sample documents shipped with the repo (data/)."""
    return DATA_DIR


@pytest.fixture
def content(data_dir):
    from portfolio.content_store import load_content

    return load_content(str(data_dir))


@pytest.fixture
def write_data(tmp_path):
    """
    Write a partial data directory and return its path.

    Usage: write_data({"profile.json": {...}, "projects.json": "not json"})
    Non-string values are dumped as JSON; strings are written verbatim.
    """

    def _write(documents):
        for name, doc in documents.items():
            text = doc if isinstance(doc, str) else json.dumps(doc, ensure_ascii=False)
            (tmp_path / name).write_text(text, encoding="utf-8")
        return tmp_path

    return _write
