import pytest

from bmp_samples import build_bmp


@pytest.fixture
def write_bmp(tmp_path):
    def _write(rows, name="image.bmp", **kwargs):
        path = tmp_path / name
        path.write_bytes(build_bmp(rows, **kwargs))
        return str(path)
    return _write
