import pytest

from minisql.core.errors import ColumnExistsError, TableExistsError, TableNotFoundError, ValueParseError
from minisql.core.models import Cell, Column, Database, DataType, Table

ID = Column('id', DataType.INTEGER)
NAME = Column('name', DataType.TEXT, 5)


def test_cell_equality_ignores_metadata() -> None:
    assert Cell(DataType.INTEGER, 1, 0, False) == Cell(DataType.INTEGER, 1, 4, True)
    assert Cell(DataType.TEXT, 'a', 5) == Cell(DataType.TEXT, 'a', 10)


def test_cells_of_different_types_never_equal() -> None:
    assert Cell(DataType.INTEGER, 1) != Cell(DataType.TEXT, '1')
    assert Cell(DataType.INTEGER, 0) != Cell(DataType.TEXT, '')


def test_integer_parsing() -> None:
    assert Cell.from_text(ID, '42').value == 42
    assert Cell.from_text(ID, '-7').value == -7
    assert Cell.from_text(ID, '+7').value == 7
    assert Cell.from_text(ID, '-2147483648').value == -2 ** 31
    assert Cell.from_text(ID, '2147483647').value == 2 ** 31 - 1


@pytest.mark.parametrize('raw', ['abc', '1.5', '', '2147483648', '-2147483649', '1_000', '0x10'])
def test_invalid_integers(raw: str) -> None:
    with pytest.raises(ValueParseError):
        Cell.from_text(ID, raw)


def test_text_is_truncated_by_characters() -> None:
    assert Cell.from_text(NAME, 'helloworld').value == 'hello'
    assert Cell.from_text(NAME, 'ñandúes').value == 'ñandú'
    assert Cell.from_text(NAME, 'hi').value == 'hi'
    assert Cell.from_text(Column('empty', DataType.TEXT, 0), 'x').value == ''


def test_cells_carry_column_metadata() -> None:
    cell = Cell.from_text(NAME, 'abc')
    assert (cell.size, cell.nullable) == (5, False)


def test_default_cells() -> None:
    assert Cell.default_for(ID) == Cell(DataType.INTEGER, 0)
    text = Cell.default_for(NAME)
    assert text == Cell(DataType.TEXT, '')
    assert text.size == 5


def test_table_rows_and_truncate() -> None:
    table = Table('t', [ID])
    table.insert_row([Cell(DataType.INTEGER, 1)])
    table.insert_row([Cell(DataType.INTEGER, 2)])
    assert table.row_count == 2
    table.truncate()
    assert (table.rows, table.row_count, table.columns) == ([], 0, [ID])


def test_table_rejects_duplicate_columns() -> None:
    table = Table('t', [ID])
    with pytest.raises(ColumnExistsError):
        table.add_column(Column('id', DataType.TEXT, 3))


def test_database_lifecycle() -> None:
    db = Database()
    db.create_table('t', [ID, NAME])
    assert 't' in db
    with pytest.raises(TableExistsError):
        db.create_table('t', [])
    db.drop_table('t')
    assert 't' not in db
    with pytest.raises(TableNotFoundError):
        db.get_table('t')
    with pytest.raises(TableNotFoundError):
        db.drop_table('t')


def test_add_column_backfills_every_table_by_default() -> None:
    db = Database()
    db.create_table('a', [ID]).insert_row([Cell(DataType.INTEGER, 1)])
    db.create_table('b', [ID]).insert_row([Cell(DataType.INTEGER, 2)])
    db.add_table_columns('a', [NAME])
    assert db.get_table('a').rows == [[Cell(DataType.INTEGER, 1), Cell(DataType.TEXT, '')]]
    assert db.get_table('b').rows == [[Cell(DataType.INTEGER, 2), Cell(DataType.TEXT, '')]]
    assert db.get_table('b').columns == [ID]


def test_add_column_scoped_to_table() -> None:
    db = Database()
    db.create_table('a', [ID]).insert_row([Cell(DataType.INTEGER, 1)])
    db.create_table('b', [ID]).insert_row([Cell(DataType.INTEGER, 2)])
    db.add_table_columns('a', [NAME], backfill_all=False)
    assert len(db.get_table('a').rows[0]) == 2
    assert len(db.get_table('b').rows[0]) == 1


@pytest.mark.parametrize('columns', [[NAME, ID], [NAME, NAME]])
def test_add_columns_rejects_duplicates_before_changing_anything(columns) -> None:
    db = Database()
    db.create_table('a', [ID]).insert_row([Cell(DataType.INTEGER, 1)])
    db.create_table('b', [ID]).insert_row([Cell(DataType.INTEGER, 2)])
    with pytest.raises(ColumnExistsError):
        db.add_table_columns('a', columns)
    assert db.get_table('a').columns == [ID]
    assert db.get_table('a').rows == [[Cell(DataType.INTEGER, 1)]]
    assert db.get_table('b').rows == [[Cell(DataType.INTEGER, 2)]]


def test_sorted_tables() -> None:
    db = Database()
    for name in ('zeta', 'alpha', 'mid'):
        db.create_table(name, [])
    assert [table.name for table in db.sorted_tables()] == ['alpha', 'mid', 'zeta']
