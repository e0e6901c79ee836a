from pathlib import Path

import pytest

from cpl_builders import two_segment_cpl


@pytest.fixture
def cpl_file(tmp_path: Path) -> Path:
    path = tmp_path / "CPL_sample.xml"
    path.write_bytes(two_segment_cpl())
    return path
