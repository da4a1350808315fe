GRAMMAR = r"""
start: statement

?statement: create_table_statement
          | drop_table_statement
          | truncate_table_statement
          | alter_table_statement
          | insert_statement
          | select_statement
          | show_tables_statement

// CREATE TABLE (schema); la lista de columnas es opcional
create_table_statement: _CREATE _TABLE WORD column_block? _SEMICOLON
column_block: _LPAR (field_definition (_COMMA field_definition)*)? _RPAR

drop_table_statement: _DROP _TABLE WORD _SEMICOLON

truncate_table_statement: _TRUNCATE _TABLE WORD _SEMICOLON

// ALTER TABLE ... ADD col tipo [, col tipo ...]
alter_table_statement: _ALTER _TABLE WORD _ADD field_definition (_COMMA field_definition)* _SEMICOLON

field_definition: WORD data_type

// DATA TYPES
data_type: _INT                          -> int_type
         | _VARCHAR _LPAR WORD _RPAR     -> varchar_type

// INSERT (columnas explícitas, emparejadas por posición con VALUES)
insert_statement: _INSERT _INTO WORD name_list _VALUES value_list _SEMICOLON
name_list: _LPAR (WORD (_COMMA WORD)*)? _RPAR
value_list: _LPAR (WORD (_COMMA WORD)*)? _RPAR

// SELECT sin WHERE
select_statement: _SELECT DISTINCT? select_list _FROM WORD _SEMICOLON
select_list: selector (_COMMA selector)*
?selector: STAR
         | WORD

show_tables_statement: _SHOW _TABLES _SEMICOLON

// Palabras clave: sensibles a mayúsculas, con prioridad sobre WORD
_CREATE.2: "CREATE"
_DROP.2: "DROP"
_TRUNCATE.2: "TRUNCATE"
_ALTER.2: "ALTER"
_INSERT.2: "INSERT"
_SELECT.2: "SELECT"
_SHOW.2: "SHOW"
_TABLE.2: "TABLE"
_TABLES.2: "TABLES"
_ADD.2: "ADD"
_INTO.2: "INTO"
_VALUES.2: "VALUES"
_FROM.2: "FROM"
DISTINCT.2: "DISTINCT"
_INT.2: "INT"
_VARCHAR.2: "VARCHAR"

_LPAR: "("
_RPAR: ")"
_COMMA: ","
_SEMICOLON: ";"
STAR: "*"

// Identificadores y literales: cualquier texto sin delimitadores
WORD: /[^\s;(),*]+/

WS: /[ \t\r\n]+/
%ignore WS
"""

# Texto de cada palabra clave -> terminal de la gramática
KEYWORDS = {
    'CREATE': '_CREATE',
    'DROP': '_DROP',
    'TRUNCATE': '_TRUNCATE',
    'ALTER': '_ALTER',
    'INSERT': '_INSERT',
    'SELECT': '_SELECT',
    'SHOW': '_SHOW',
    'TABLE': '_TABLE',
    'TABLES': '_TABLES',
    'ADD': '_ADD',
    'INTO': '_INTO',
    'VALUES': '_VALUES',
    'FROM': '_FROM',
    'DISTINCT': 'DISTINCT',
    'INT': '_INT',
    'VARCHAR': '_VARCHAR',
}

PUNCTUATION = {
    '(': '_LPAR',
    ')': '_RPAR',
    ',': '_COMMA',
    ';': '_SEMICOLON',
    '*': 'STAR',
}

# Palabras que pueden iniciar una sentencia
LEADING_KEYWORDS = ('CREATE', 'DROP', 'TRUNCATE', 'ALTER', 'INSERT', 'SELECT', 'SHOW')

TYPE_TERMINALS = frozenset({'_INT', '_VARCHAR'})

TERMINAL_NAMES = {terminal: text for text, terminal in {**KEYWORDS, **PUNCTUATION}.items()}
TERMINAL_NAMES['WORD'] = '<identificador>'
TERMINAL_NAMES['$END'] = '<fin>'
