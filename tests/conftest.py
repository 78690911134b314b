import logging

import pytest

from dirpercent import app


def write_file(path, size: int) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)


@pytest.fixture
def sample_tree(tmp_path):
    """
    root/
    ├── a        300 bytes
    ├── b        100 bytes
    └── c/
        └── d    600 bytes
    """
    root = tmp_path / "root"
    write_file(root / "a", 300)
    write_file(root / "b", 100)
    write_file(root / "c" / "d", 600)
    return root


@pytest.fixture(autouse=True)
def reset_app_logging():
    yield
    log = logging.getLogger(app.APP_NAME)
    if app._handler is not None:
        log.removeHandler(app._handler)
        app._handler = None
    log.setLevel(logging.NOTSET)
