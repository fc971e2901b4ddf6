"""
Fixtures for CLI tests: a small project on disk.
"""

import pytest


@pytest.fixture
def project_dir(repo, tmp_path):
    repo.module("A:1.0", api=["libX:1.0"], implementation=["libY:1.0"])
    repo.module("B:2.0", api=["libX:1.0"])
    repo.module("libX:1.0", files=["libX.jar"])
    repo.module("libY:1.0", files=["libY.jar"])
    repo.write_index()
    (tmp_path / "modsync.toml").write_text("""
[project]
name = "game"
version = "1.0.0"

[repository]
index = "repo/index.toml"

[mods]
A = "1.0"
B = "2.0"
""")
    return tmp_path
