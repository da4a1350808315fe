import io

import pytest

from minisql.core.config import EngineConfig
from minisql.parser.sql_executor import SQLExecutor


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def executor(out: io.StringIO) -> SQLExecutor:
    return SQLExecutor(config=EngineConfig(column_width=5), out=out)
