import pytest

from minisql.core.errors import ParseError, UnsupportedTypeError
from minisql.core.models import Column, DataType
from minisql.parser.sql_parser import (
    AlterTable,
    CreateTable,
    DropTable,
    InsertInto,
    SelectFrom,
    ShowTables,
    SQLParser,
    TruncateTable,
    parse,
)


@pytest.fixture(scope='module')
def parser() -> SQLParser:
    return SQLParser()


def test_empty_script(parser: SQLParser) -> None:
    assert parser.parse("") == []
    assert parser.parse("  \n\t ") == []


def test_unrecognized_leading_token_ends_parsing(parser: SQLParser) -> None:
    assert parser.parse("hello world;") == []
    assert parser.parse("SHOW TABLES; garbage ( here") == [ShowTables()]


def test_keywords_are_case_sensitive(parser: SQLParser) -> None:
    assert parser.parse("show tables;") == []


def test_strict_mode_rejects_unrecognized_statement() -> None:
    with pytest.raises(ParseError):
        parse("SHOW TABLES; garbage;", strict=True)


def test_create_table(parser: SQLParser) -> None:
    plans = parser.parse("CREATE TABLE t (id INT, name VARCHAR(5));")
    assert plans == [CreateTable('t', [
        Column('id', DataType.INTEGER, 0, False),
        Column('name', DataType.TEXT, 5, False),
    ])]


def test_create_table_without_columns(parser: SQLParser) -> None:
    assert parser.parse("CREATE TABLE t;") == [CreateTable('t', [])]
    assert parser.parse("CREATE TABLE t ();") == [CreateTable('t', [])]


def test_script_with_layout(parser: SQLParser) -> None:
    script = (
        "CREATE TABLE users (\n"
        "\tid INT,\n"
        "\tname VARCHAR ( 10 )\n"
        ");\n"
        "DROP   TABLE users;\n"
        "TRUNCATE TABLE users ;\n"
        "SHOW TABLES;"
    )
    plans = parser.parse(script)
    assert [plan.operation for plan in plans] == ['CREATE_TABLE', 'DROP_TABLE', 'TRUNCATE_TABLE', 'SHOW_TABLES']
    assert plans[0].columns[1] == Column('name', DataType.TEXT, 10)
    assert plans[1] == DropTable('users')
    assert plans[2] == TruncateTable('users')


def test_statements_on_one_line(parser: SQLParser) -> None:
    assert parser.parse("SHOW TABLES;SHOW TABLES; SHOW TABLES;") == [ShowTables()] * 3


def test_alter_table(parser: SQLParser) -> None:
    assert parser.parse("ALTER TABLE t ADD extra INT, note VARCHAR(3);") == [
        AlterTable('t', [Column('extra', DataType.INTEGER), Column('note', DataType.TEXT, 3)]),
    ]


def test_insert(parser: SQLParser) -> None:
    assert parser.parse("INSERT INTO t (id, name) VALUES (1, helloworld);") == [
        InsertInto('t', ['id', 'name'], ['1', 'helloworld']),
    ]


def test_select(parser: SQLParser) -> None:
    assert parser.parse("SELECT * FROM t;") == [SelectFrom('t', ['*'], False)]
    assert parser.parse("SELECT DISTINCT a, b, a FROM t;") == [SelectFrom('t', ['a', 'b', 'a'], True)]


def test_keywords_usable_as_names_where_no_keyword_fits(parser: SQLParser) -> None:
    plans = parser.parse("CREATE TABLE TABLE (INT INT); INSERT INTO TABLE (INT) VALUES (VALUES);")
    assert plans == [
        CreateTable('TABLE', [Column('INT', DataType.INTEGER)]),
        InsertInto('TABLE', ['INT'], ['VALUES']),
    ]


def test_misspelled_keyword_is_fatal(parser: SQLParser) -> None:
    with pytest.raises(ParseError) as exc_info:
        parser.parse("SHOW TABLES; CREATE TABEL t;")
    assert exc_info.value.token == 'TABEL'


def test_unknown_data_type(parser: SQLParser) -> None:
    with pytest.raises(UnsupportedTypeError) as exc_info:
        parser.parse("CREATE TABLE t (a TEXT);")
    assert exc_info.value.kind == 'UnsupportedType'


def test_invalid_varchar_size(parser: SQLParser) -> None:
    with pytest.raises(ParseError) as exc_info:
        parser.parse("CREATE TABLE t (a VARCHAR(abc));")
    assert not isinstance(exc_info.value, UnsupportedTypeError)


def test_missing_semicolon(parser: SQLParser) -> None:
    with pytest.raises(ParseError):
        parser.parse("SHOW TABLES")


def test_insert_with_mismatched_lists(parser: SQLParser) -> None:
    with pytest.raises(ParseError):
        parser.parse("INSERT INTO t (a, b) VALUES (1);")


def test_parse_file(parser: SQLParser, tmp_path) -> None:
    script = tmp_path / "script.sql"
    script.write_text("SHOW TABLES;\n", encoding='utf-8')
    assert parser.parse_file(str(script)) == [ShowTables()]

    with pytest.raises(FileNotFoundError):
        parser.parse_file(str(tmp_path / "missing.sql"))
