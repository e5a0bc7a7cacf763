import pytest

ENV_VARS = ("RUNLEDGER_PRECISION", "RUNLEDGER_LOG_LEVEL")

EXAMPLE_DOCUMENT = (
    "100 * 2       initial deposit\n"
    "30            rent\n"
    "---\n"
    "            running balance\n"
    "20            groceries\n"
    "---\n"
    "            running balance\n"
)

EXAMPLE_OUTPUT = (
    "100 * 2 initial deposit\n"
    "     30 rent\n"
    "-------\n"
    "    170 running balance\n"
    "\n"
    "     20 groceries\n"
    "-------\n"
    "    150 running balance\n"
    "\n"
)


@pytest.fixture
def example_document():
    return EXAMPLE_DOCUMENT


@pytest.fixture
def example_output():
    return EXAMPLE_OUTPUT


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # setenv before delenv so teardown also removes values loaded from a .env file
    for var in ENV_VARS:
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    monkeypatch.chdir(tmp_path)
    return tmp_path
