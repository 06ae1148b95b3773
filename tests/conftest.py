import pytest

from psil.builtin.env_builtin import binary, initial_envs
from psil.interpreter import Interpreter


@pytest.fixture
def envs():
    """Fresh (typing, value) environments with builtins loaded."""
    return initial_envs()


@pytest.fixture
def tenv(envs):
    return envs[0]


@pytest.fixture
def venv(envs):
    return envs[1]


@pytest.fixture
def venv_f1(venv):
    """Value environment that also knows f1, where (f1 x y) = y + 5."""
    return venv.extend("f1", binary("f1", lambda x, y: y + 5))


@pytest.fixture
def interp(monkeypatch):
    monkeypatch.delenv("PSIL_PRELUDE_PATH", raising=False)
    return Interpreter()
