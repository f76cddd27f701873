import pytest


@pytest.fixture(autouse=True)
def isolated_data_path(tmp_path, monkeypatch):
    """Keep snapshots and telemetry of every test inside its own tmp dir."""
    monkeypatch.setenv("SENTENCEGRAPH_DATA_PATH", str(tmp_path))
    monkeypatch.delenv("SENTENCEGRAPH_TELEMETRY_LOG", raising=False)
    monkeypatch.delenv("SENTENCEGRAPH_TELEMETRY_ENABLED", raising=False)
    return tmp_path
