"""Shared fixtures for the Railway CLI tests."""

from __future__ import annotations

from typing import Callable, Optional

import pytest

from railway_cli.config.environment import EnvSnapshot
from railway_cli.configs import Configs


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def home(tmp_path) -> str:
    path = tmp_path / "home"
    path.mkdir()
    return str(path)


@pytest.fixture()
def make_configs(home: str) -> Callable[..., Configs]:
    """Build a :class:`Configs` rooted at the temporary home directory."""

    def _make(cwd: Optional[str] = "/work/app", **env_vars: str) -> Configs:
        return Configs(env=EnvSnapshot(**env_vars), home=home, cwd=cwd)

    return _make
