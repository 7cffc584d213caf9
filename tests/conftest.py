import contextlib

import pytest

from gitobj.log import configure_logging
from gitobj.models import Git


@pytest.fixture(autouse=True)
def quiet_logging():
    configure_logging(level="WARNING")


@pytest.fixture
def change_to_tmp_dir(tmp_path, monkeypatch):
    monkeypatch.delenv("GIT_DIR", raising=False)
    with contextlib.chdir(tmp_path):
        yield tmp_path


@pytest.fixture
def git(change_to_tmp_dir):
    git = Git()
    git.init_repo()
    return git
