"""
Errores del motor SQL. Cada error lleva un `kind` estable que el executor
devuelve en el diccionario de resultado.
"""

from typing import Iterable, Optional


class SQLError(Exception):
    """Error base: cualquier fallo que detiene la ejecución del script."""

    kind = 'SQLError'


class ParseError(SQLError):
    """El texto no respeta la gramática."""

    kind = 'ParseError'

    def __init__(self, message: str, token: Optional[str] = None, position: Optional[int] = None):
        super().__init__(message)
        self.token = token
        self.position = position


class UnsupportedTypeError(ParseError):
    """Tipo de dato distinto de INT o VARCHAR(n)."""

    kind = 'UnsupportedType'


class ValueParseError(SQLError):
    kind = 'ValueParseError'

    def __init__(self, column: str, value: str):
        super().__init__(f'Valor "{value}" no es un INT válido para la columna "{column}"')
        self.column = column
        self.value = value


class TableExistsError(SQLError):
    kind = 'TableExists'

    def __init__(self, table_name: str):
        super().__init__(f'Tabla "{table_name}" ya existe')
        self.table_name = table_name


class TableNotFoundError(SQLError):
    kind = 'TableNotFound'

    def __init__(self, table_name: str):
        super().__init__(f'Tabla "{table_name}" no existe')
        self.table_name = table_name


class ColumnNotFoundError(SQLError):
    kind = 'ColumnNotFound'

    def __init__(self, table_name: str, column: str):
        super().__init__(f'Columna "{column}" no existe en la tabla "{table_name}"')
        self.table_name = table_name
        self.column = column


class ColumnExistsError(SQLError):
    kind = 'ColumnExists'

    def __init__(self, table_name: str, column: str):
        super().__init__(f'Columna "{column}" ya existe en la tabla "{table_name}"')
        self.table_name = table_name
        self.column = column


class IncompleteInsertError(SQLError):
    """INSERT que no nombra todas las columnas de la tabla (modo estricto)."""

    kind = 'IncompleteInsert'

    def __init__(self, table_name: str, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(
            f'INSERT en "{table_name}" sin valores para: {", ".join(self.missing)}'
        )
        self.table_name = table_name
