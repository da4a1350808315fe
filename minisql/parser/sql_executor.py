#!/usr/bin/env python3
"""
Executor SQL que toma ExecutionPlan y los ejecuta sobre la base de datos en memoria.
"""

import logging
import sys
from typing import Any, Dict, List, Optional, TextIO

from ..core.config import EngineConfig
from ..core.errors import (
    ColumnNotFoundError,
    IncompleteInsertError,
    ParseError,
    SQLError,
)
from ..core.models import Cell, Database, Row
from .sql_parser import (
    AlterTable,
    CreateTable,
    DropTable,
    ExecutionPlan,
    InsertInto,
    SelectFrom,
    SQLParser,
    TruncateTable,
)

logger = logging.getLogger(__name__)

WILDCARD = '*'


class SQLExecutor:
    """Executor que ejecuta ExecutionPlan sobre la base de datos."""

    def __init__(self, database: Optional[Database] = None, config: Optional[EngineConfig] = None,
                 out: Optional[TextIO] = None):
        self.database = database if database is not None else Database()
        self.config = config or EngineConfig()
        self.out = out if out is not None else sys.stdout
        self.parser = SQLParser(strict=self.config.strict_parse)

    def _emit(self, line: str = ''):
        print(line, file=self.out)

    def execute(self, plan: ExecutionPlan) -> Dict[str, Any]:
        """
        Ejecuta un ExecutionPlan.

        Devuelve siempre un diccionario con 'success'; si la sentencia falla
        incluye además 'error' y 'kind'.
        """
        operation = plan.operation
        logger.debug("execute: %s", operation)
        self._emit(f"Command: {plan.description}")

        try:
            if operation == 'CREATE_TABLE':
                result = self._execute_create_table(plan)
            elif operation == 'DROP_TABLE':
                result = self._execute_drop_table(plan)
            elif operation == 'TRUNCATE_TABLE':
                result = self._execute_truncate_table(plan)
            elif operation == 'ALTER_TABLE':
                result = self._execute_alter_table(plan)
            elif operation == 'INSERT':
                result = self._execute_insert(plan)
            elif operation == 'SELECT':
                result = self._execute_select(plan)
            elif operation == 'SHOW_TABLES':
                result = self._execute_show_tables()
            else:
                result = {'success': False, 'error': f'Operación no soportada: {operation}',
                          'kind': 'UnsupportedOperation'}
        except SQLError as e:
            logger.debug("%s falló: %s", operation, e)
            return {'success': False, 'error': str(e), 'kind': e.kind}

        return result

    def execute_all(self, plans: List[ExecutionPlan]) -> List[Dict[str, Any]]:
        """Ejecuta los planes en orden; se detiene en el primer fallo."""
        results = []
        for plan in plans:
            result = self.execute(plan)
            results.append(result)
            if not result.get('success'):
                break
        return results

    def execute_script(self, content: str) -> List[Dict[str, Any]]:
        """
        Parsea y ejecuta un script completo. Un error de sintaxis impide
        ejecutar cualquier sentencia.
        """
        try:
            plans = self.parser.parse(content)
        except SQLError as e:
            logger.debug("Error de sintaxis: %s", e)
            return [{'success': False, 'error': str(e), 'kind': e.kind}]
        return self.execute_all(plans)

    def _execute_create_table(self, plan: CreateTable) -> Dict[str, Any]:
        """Ejecuta CREATE TABLE."""
        table = self.database.create_table(plan.table_name, plan.columns)
        return {
            'success': True,
            'message': f'Tabla "{plan.table_name}" creada',
            'fields': len(table.columns),
        }

    def _execute_drop_table(self, plan: DropTable) -> Dict[str, Any]:
        self.database.drop_table(plan.table_name)
        return {'success': True, 'message': f'Tabla "{plan.table_name}" eliminada'}

    def _execute_truncate_table(self, plan: TruncateTable) -> Dict[str, Any]:
        table = self.database.get_table(plan.table_name)
        removed = table.row_count
        table.truncate()
        return {
            'success': True,
            'message': f'Tabla "{plan.table_name}" vaciada',
            'rows_removed': removed,
        }

    def _execute_alter_table(self, plan: AlterTable) -> Dict[str, Any]:
        """
        Ejecuta ALTER TABLE ... ADD. Según `alter_backfill` el valor por
        defecto de cada columna nueva se agrega a las filas de todas las
        tablas o solo a las de la tabla alterada. Si una columna ya existe no
        se agrega ninguna.
        """
        self.database.add_table_columns(plan.table_name, plan.columns,
                                        backfill_all=self.config.backfill_all_tables)
        return {
            'success': True,
            'message': f'{len(plan.columns)} columnas agregadas a "{plan.table_name}"',
            'fields': len(self.database.get_table(plan.table_name).columns),
        }

    def _execute_insert(self, plan: InsertInto) -> Dict[str, Any]:
        table = self.database.get_table(plan.table_name)

        # los planes construidos a mano no pasan por el transformer
        if len(plan.columns) != len(plan.values):
            raise ParseError(
                f"INSERT en '{plan.table_name}' con {len(plan.columns)} columnas "
                f"y {len(plan.values)} valores"
            )

        for column in plan.columns:
            if table.find_column(column) is None:
                raise ColumnNotFoundError(plan.table_name, column)

        if self.config.strict_insert:
            missing = [name for name in table.column_names if name not in plan.columns]
            if missing:
                raise IncompleteInsertError(plan.table_name, missing)

        # La fila sigue el orden de la tabla; cada columna toma el valor de
        # su primera aparición en la lista del INSERT.
        row: Row = []
        for column in table.columns:
            if column.name in plan.columns:
                raw = plan.values[plan.columns.index(column.name)]
                row.append(Cell.from_text(column, raw))

        if len(row) < len(table.columns):
            logger.warning("INSERT en '%s' con %d de %d columnas: fila incompleta",
                           plan.table_name, len(row), len(table.columns))

        table.insert_row(row)
        return {
            'success': True,
            'message': f'Registro insertado en "{plan.table_name}"',
            'values': [cell.value for cell in row],
        }

    def _execute_select(self, plan: SelectFrom) -> Dict[str, Any]:
        table = self.database.get_table(plan.table_name)

        for column in plan.columns:
            if column != WILDCARD and table.find_column(column) is None:
                raise ColumnNotFoundError(plan.table_name, column)

        # Posiciones a proyectar; '*' expande a todas, los duplicados se mantienen
        indexes: List[int] = []
        for column in plan.columns:
            if column == WILDCARD:
                indexes.extend(range(len(table.columns)))
            else:
                indexes.append(table.find_column(column))
        output_columns = [table.columns[index].name for index in indexes]

        output_rows = [
            [row[index] for index in indexes if index < len(row)]
            for row in table.rows
        ]
        if plan.distinct:
            output_rows = self._distinct(output_rows)

        self._emit("Results:")
        self._emit(self._format_line(output_columns))
        for row in output_rows:
            self._emit(self._format_line(row))
        self._emit()

        return {
            'success': True,
            'columns': output_columns,
            'rows': [[cell.value for cell in row] for row in output_rows],
            'count': len(output_rows),
        }

    @staticmethod
    def _distinct(rows: List[Row]) -> List[Row]:
        """Conserva una fila solo si ninguna fila ya conservada es igual en todas las posiciones."""
        distinct_rows: List[Row] = []
        for row in rows:
            if not any(len(kept) == len(row) and all(a == b for a, b in zip(kept, row))
                       for kept in distinct_rows):
                distinct_rows.append(row)
        return distinct_rows

    def _format_line(self, values) -> str:
        width = self.config.column_width
        return ''.join(f" {str(value):<{width}} |" for value in values)

    def _execute_show_tables(self) -> Dict[str, Any]:
        tables = []
        for table in self.database.sorted_tables():
            self._emit(f"Table name: {table.name}")
            self._emit(f"\tRow count: {table.row_count}")
            self._emit(f"\tColumn count: {len(table.columns)}")
            tables.append({
                'table_name': table.name,
                'rows': table.row_count,
                'fields': len(table.columns),
            })
        return {'success': True, 'tables': tables, 'count': len(tables)}

    def list_tables(self) -> Dict[str, Any]:
        """Lista todas las tablas creadas."""
        return {
            'success': True,
            'tables': sorted(self.database.tables),
            'count': len(self.database.tables),
        }

    def get_table_info(self, table_name: str) -> Dict[str, Any]:
        """Obtiene información de una tabla."""
        if table_name not in self.database:
            return {'success': False, 'error': f'Tabla "{table_name}" no existe',
                    'kind': 'TableNotFound'}

        table = self.database.get_table(table_name)
        return {
            'success': True,
            'table_name': table_name,
            'columns': [str(column) for column in table.columns],
            'rows': table.row_count,
            'fields': len(table.columns),
        }
