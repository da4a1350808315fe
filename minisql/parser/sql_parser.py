#!/usr/bin/env python3
"""
Parser SQL que devuelve una lista de ExecutionPlan sin side-effects.

El texto se tokeniza con `tokenize` y los tokens se entregan uno a uno al
parser interactivo de Lark, sentencia por sentencia, con un único cursor
que solo avanza.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import ClassVar, List, Optional

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedToken, VisitError

from ..core.errors import ParseError, SQLError, UnsupportedTypeError
from ..core.models import Column, DataType
from .grammar import (
    GRAMMAR,
    KEYWORDS,
    LEADING_KEYWORDS,
    PUNCTUATION,
    TERMINAL_NAMES,
    TYPE_TERMINALS,
)
from .tokenizer import is_indentation, tokenize

logger = logging.getLogger(__name__)


@dataclass
class ExecutionPlan:
    """Representa un plan de ejecución para una sentencia SQL."""

    operation: ClassVar[str] = ''
    description: ClassVar[str] = ''


@dataclass
class CreateTable(ExecutionPlan):
    operation: ClassVar[str] = 'CREATE_TABLE'
    description: ClassVar[str] = 'Create statement'

    table_name: str
    columns: List[Column] = field(default_factory=list)


@dataclass
class DropTable(ExecutionPlan):
    operation: ClassVar[str] = 'DROP_TABLE'
    description: ClassVar[str] = 'Drop statement'

    table_name: str


@dataclass
class TruncateTable(ExecutionPlan):
    operation: ClassVar[str] = 'TRUNCATE_TABLE'
    description: ClassVar[str] = 'Truncate statement'

    table_name: str


@dataclass
class AlterTable(ExecutionPlan):
    operation: ClassVar[str] = 'ALTER_TABLE'
    description: ClassVar[str] = 'Alter statement'

    table_name: str
    columns: List[Column] = field(default_factory=list)


@dataclass
class InsertInto(ExecutionPlan):
    operation: ClassVar[str] = 'INSERT'
    description: ClassVar[str] = 'Insert statement'

    table_name: str
    columns: List[str] = field(default_factory=list)
    values: List[str] = field(default_factory=list)


@dataclass
class SelectFrom(ExecutionPlan):
    operation: ClassVar[str] = 'SELECT'
    description: ClassVar[str] = 'Select statement'

    table_name: str
    columns: List[str] = field(default_factory=list)
    distinct: bool = False


@dataclass
class ShowTables(ExecutionPlan):
    operation: ClassVar[str] = 'SHOW_TABLES'
    description: ClassVar[str] = 'Show tables statement'


class SQLTransformer(Transformer):
    """
    Convierte el árbol de una sentencia en su ExecutionPlan.
    Los identificadores llegan como Token WORD y se normalizan a str.
    """

    def start(self, items):
        return items[0]

    # --- tipos de datos ---
    def int_type(self, items):
        return DataType.INTEGER, 0

    def varchar_type(self, items):
        """Procesa VARCHAR(n)."""
        size = str(items[0])
        if not size.isascii() or not size.isdigit():
            raise ParseError(f"Tamaño de VARCHAR inválido: {size}", token=size,
                             position=items[0].start_pos)
        return DataType.TEXT, int(size)

    def field_definition(self, items):
        name, (data_type, size) = items
        return Column(name=str(name), data_type=data_type, size=size, nullable=False)

    def column_block(self, items):
        return list(items)

    # --- sentencias ---
    def create_table_statement(self, items):
        columns = items[1] if len(items) > 1 else []
        return CreateTable(table_name=str(items[0]), columns=columns)

    def drop_table_statement(self, items):
        return DropTable(table_name=str(items[0]))

    def truncate_table_statement(self, items):
        return TruncateTable(table_name=str(items[0]))

    def alter_table_statement(self, items):
        return AlterTable(table_name=str(items[0]), columns=list(items[1:]))

    def name_list(self, items):
        return [str(item) for item in items]

    def value_list(self, items):
        return [str(item) for item in items]

    def insert_statement(self, items):
        table_name, columns, values = items
        if len(columns) != len(values):
            raise ParseError(
                f"INSERT en '{table_name}' con {len(columns)} columnas y {len(values)} valores",
                token=str(table_name), position=table_name.start_pos,
            )
        return InsertInto(table_name=str(table_name), columns=columns, values=values)

    def select_list(self, items):
        return [str(item) for item in items]

    def select_statement(self, items):
        distinct = isinstance(items[0], Token) and items[0].type == 'DISTINCT'
        columns, table_name = items[-2], items[-1]
        return SelectFrom(table_name=str(table_name), columns=columns, distinct=distinct)

    def show_tables_statement(self, items):
        return ShowTables()


class TokenCursor:
    """Cursor hacia adelante sobre la lista de tokens."""

    def __init__(self, tokens: List[str]):
        self.tokens = tokens
        self.position = 0

    def at_end(self) -> bool:
        return self.position >= len(self.tokens)

    def current(self) -> str:
        return self.tokens[self.position]

    def advance(self):
        self.position += 1

    def skip_indentation(self):
        while not self.at_end() and is_indentation(self.current()):
            self.advance()


class SQLParser:
    def __init__(self, grammar: str = GRAMMAR, strict: bool = False):
        self.parser = Lark(grammar, parser='lalr')
        self.transformer = SQLTransformer()
        self.strict = strict

    def parse(self, sql_command: str) -> List[ExecutionPlan]:
        """
        Parsea un script SQL y devuelve sus ExecutionPlan en orden.

        Un token inicial que no abre ninguna sentencia termina el parseo
        (modo estricto: ParseError). Cualquier otro error de sintaxis aborta
        el script completo.
        """
        tokens = tokenize(sql_command)
        logger.debug("Tokens: %d", len(tokens))
        return self.parse_tokens(tokens)

    def parse_tokens(self, tokens: List[str]) -> List[ExecutionPlan]:
        cursor = TokenCursor(tokens)
        plans = []
        while True:
            cursor.skip_indentation()
            if cursor.at_end():
                break
            leading = cursor.current()
            if leading not in LEADING_KEYWORDS:
                if self.strict:
                    raise ParseError(f"Sentencia no reconocida: '{leading}'",
                                     token=leading, position=cursor.position)
                logger.debug("Parser: token '%s' no inicia sentencia, fin del script", leading)
                break
            plans.append(self._parse_statement(cursor))
        return plans

    def parse_file(self, filename: str) -> List[ExecutionPlan]:
        """
        Parsea un archivo con comandos SQL.

        Args:
            filename: Ruta del archivo SQL

        Returns:
            Lista de ExecutionPlan
        """
        if not os.path.exists(filename):
            raise FileNotFoundError(f"Archivo no encontrado: {filename}")

        with open(filename, 'r', encoding='utf-8') as f:
            content = f.read()
        return self.parse(content)

    def _parse_statement(self, cursor: TokenCursor) -> ExecutionPlan:
        interactive = self.parser.parse_interactive()
        last_token = None
        while True:
            cursor.skip_indentation()
            if cursor.at_end():
                # sentencia sin ';' final: Lark rechaza el $END
                tree = self._feed_eof(interactive, last_token)
                break
            text = cursor.current()
            token = Token(self._classify(text, interactive), text, start_pos=cursor.position)
            self._feed(interactive, token)
            cursor.advance()
            last_token = token
            if token.type == '_SEMICOLON':
                tree = self._feed_eof(interactive, last_token)
                break

        try:
            plan = self.transformer.transform(tree)
        except VisitError as e:
            if isinstance(e.orig_exc, SQLError):
                raise e.orig_exc from None
            raise
        logger.debug("Parser: %s sobre '%s'", plan.description, getattr(plan, 'table_name', '-'))
        return plan

    def _classify(self, text: str, interactive) -> str:
        """Tipo de terminal del token: palabra clave solo si la gramática la acepta aquí."""
        if text in PUNCTUATION:
            return PUNCTUATION[text]
        terminal = KEYWORDS.get(text)
        if terminal is not None and terminal in interactive.accepts():
            return terminal
        return 'WORD'

    def _feed(self, interactive, token: Token):
        try:
            interactive.feed_token(token)
        except UnexpectedToken as e:
            raise self._syntax_error(token, e.expected) from None

    def _feed_eof(self, interactive, last_token: Optional[Token]):
        try:
            return interactive.feed_eof(last_token)
        except UnexpectedToken as e:
            raise self._syntax_error(e.token, e.expected) from None

    def _syntax_error(self, token: Token, expected) -> ParseError:
        expected = set(expected or ())
        if token.type == '$END':
            return ParseError(
                f"Fin de entrada inesperado (se esperaba: {self._describe(expected)})",
                position=token.start_pos,
            )
        if expected and expected <= TYPE_TERMINALS:
            return UnsupportedTypeError(f"Tipo de dato no soportado: {token}",
                                        token=str(token), position=token.start_pos)
        return ParseError(
            f"Token inesperado '{token}' (se esperaba: {self._describe(expected)})",
            token=str(token), position=token.start_pos,
        )

    @staticmethod
    def _describe(expected) -> str:
        return ', '.join(sorted(TERMINAL_NAMES.get(name, name) for name in expected))


def parse(sql_command: str, strict: bool = False) -> List[ExecutionPlan]:
    return SQLParser(strict=strict).parse(sql_command)
