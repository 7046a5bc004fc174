import os

import pytest

NATDED_ENV_VARS = ("NATDED_LOG_LEVEL", "NATDED_ASCII")


@pytest.fixture
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Run in an empty directory with no NATDED_* variables set.

    ``load_dotenv`` writes straight into ``os.environ``, so anything it
    loaded is removed again before monkeypatch restores the originals.
    """
    monkeypatch.chdir(tmp_path)
    for name in NATDED_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield tmp_path
    for name in NATDED_ENV_VARS:
        os.environ.pop(name, None)
