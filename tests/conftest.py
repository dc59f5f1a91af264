import pytest
from click.testing import CliRunner


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def input_dir(tmp_path):
    """Provides an empty input directory inside `tmp_path`."""
    directory = tmp_path / "files"
    directory.mkdir()
    return directory
