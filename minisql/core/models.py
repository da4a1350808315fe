"""
Modelos en memoria: columnas, celdas, tablas y la base de datos.

No hay persistencia; la base de datos vive lo que dura el proceso.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union

from .errors import (
    ColumnExistsError,
    TableExistsError,
    TableNotFoundError,
    UnsupportedTypeError,
    ValueParseError,
)

INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1

_INT_LITERAL = re.compile(r'[+-]?[0-9]+')


class DataType(str, Enum):
    INTEGER = 'INT'
    TEXT = 'VARCHAR'


@dataclass(frozen=True)
class Column:
    name: str
    data_type: DataType
    size: int = 0
    nullable: bool = False

    def __str__(self):
        if self.data_type is DataType.TEXT:
            return f"{self.name} VARCHAR({self.size})"
        return f"{self.name} INT"


@dataclass(eq=False)
class Cell:
    """
    Valor tipado en una posición fila/columna.

    Dos celdas son iguales si tienen el mismo tipo y el mismo valor; el
    tamaño y la nulabilidad que arrastran no cuentan.
    """

    data_type: DataType
    value: Union[int, str]
    size: int = 0
    nullable: bool = False

    def __eq__(self, other):
        if not isinstance(other, Cell):
            return NotImplemented
        return self.data_type is other.data_type and self.value == other.value

    def __hash__(self):
        return hash((self.data_type, self.value))

    def __str__(self):
        return str(self.value)

    @classmethod
    def default_for(cls, column: Column) -> 'Cell':
        """Celda por defecto para rellenar filas existentes (0 o "")."""
        if column.data_type is DataType.INTEGER:
            return cls(DataType.INTEGER, 0, column.size, column.nullable)
        if column.data_type is DataType.TEXT:
            return cls(DataType.TEXT, '', column.size, column.nullable)
        raise UnsupportedTypeError(f"Tipo de dato no soportado: {column.data_type}")

    @classmethod
    def from_text(cls, column: Column, raw: str) -> 'Cell':
        """Convierte el texto crudo de un VALUES al tipo de la columna."""
        if column.data_type is DataType.INTEGER:
            if not _INT_LITERAL.fullmatch(raw):
                raise ValueParseError(column.name, raw)
            value = int(raw)
            if value < INT_MIN or value > INT_MAX:
                raise ValueParseError(column.name, raw)
            return cls(DataType.INTEGER, value, column.size, column.nullable)
        if column.data_type is DataType.TEXT:
            # truncado por caracteres, no por bytes
            if len(raw) > column.size:
                raw = raw[:column.size]
            return cls(DataType.TEXT, raw, column.size, column.nullable)
        raise UnsupportedTypeError(f"Tipo de dato no soportado: {column.data_type}")


Row = List[Cell]


@dataclass
class Table:
    name: str
    columns: List[Column] = field(default_factory=list)
    rows: List[Row] = field(default_factory=list)
    row_count: int = 0

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    def find_column(self, name: str) -> Optional[int]:
        """Posición de la columna `name`, o None si no existe."""
        for index, column in enumerate(self.columns):
            if column.name == name:
                return index
        return None

    def add_column(self, column: Column):
        if self.find_column(column.name) is not None:
            raise ColumnExistsError(self.name, column.name)
        self.columns.append(column)

    def backfill(self, column: Column):
        for row in self.rows:
            row.append(Cell.default_for(column))

    def insert_row(self, row: Row):
        self.rows.append(row)
        self.row_count += 1

    def truncate(self):
        self.rows.clear()
        self.row_count = 0


@dataclass
class Database:
    tables: Dict[str, Table] = field(default_factory=dict)

    def __contains__(self, table_name: str) -> bool:
        return table_name in self.tables

    def create_table(self, table_name: str, columns: List[Column]) -> Table:
        if table_name in self.tables:
            raise TableExistsError(table_name)
        table = Table(table_name)
        for column in columns:
            table.add_column(column)
        self.tables[table_name] = table
        return table

    def get_table(self, table_name: str) -> Table:
        try:
            return self.tables[table_name]
        except KeyError:
            raise TableNotFoundError(table_name) from None

    def drop_table(self, table_name: str):
        self.get_table(table_name)
        del self.tables[table_name]

    def add_table_columns(self, table_name: str, columns: List[Column], backfill_all: bool = True):
        """
        Agrega `columns` a la tabla y rellena filas existentes con el valor
        por defecto: las de todas las tablas si `backfill_all`, si no solo
        las de la tabla alterada.

        Todos los nombres se validan antes de modificar nada.
        """
        table = self.get_table(table_name)
        seen = set(table.column_names)
        for column in columns:
            if column.name in seen:
                raise ColumnExistsError(table_name, column.name)
            seen.add(column.name)

        targets = list(self.tables.values()) if backfill_all else [table]
        for column in columns:
            table.add_column(column)
            for target in targets:
                target.backfill(column)

    def sorted_tables(self) -> List[Table]:
        return [self.tables[name] for name in sorted(self.tables)]
