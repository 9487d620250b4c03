import stat

import pytest
import yaml
from click.testing import CliRunner


@pytest.fixture
def cli_runner():
    """Provides a Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def fake_runtime(tmp_path):
    """Creates executable shell scripts that stand in for the container runtime."""
    def _create(body: str, name: str = "fake-docker"):
        script = tmp_path / name
        script.write_text(f"#!/bin/sh\n{body}\n")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(script)

    return _create


@pytest.fixture
def config_file(tmp_path):
    """Writes a containerdev config file with the given profiles."""
    def _create(containers):
        path = tmp_path / "config" / "containerdev.yaml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump({"containers": containers}))
        return path

    return _create
