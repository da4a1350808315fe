from .core.config import EngineConfig
from .core.models import Cell, Column, Database, DataType, Table
from .parser.sql_executor import SQLExecutor
from .parser.sql_parser import SQLParser, parse
from .parser.tokenizer import tokenize

__version__ = "0.1.0"
