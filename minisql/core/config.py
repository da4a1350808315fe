"""
Configuración del motor.
"""

from dataclasses import dataclass

ALTER_BACKFILL_SCOPES = ('database', 'table')


@dataclass
class EngineConfig:
    # True: un token inicial no reconocido es error en vez de fin de script
    strict_parse: bool = False
    # True: INSERT debe nombrar todas las columnas de la tabla
    strict_insert: bool = False
    # 'database' rellena las filas de todas las tablas en ALTER, 'table' solo la alterada
    alter_backfill: str = 'database'
    column_width: int = 15

    def __post_init__(self):
        if self.alter_backfill not in ALTER_BACKFILL_SCOPES:
            raise ValueError(
                f"alter_backfill debe ser uno de {ALTER_BACKFILL_SCOPES}, no {self.alter_backfill!r}"
            )
        if self.column_width < 0:
            raise ValueError(f"column_width no puede ser negativo: {self.column_width}")

    @property
    def backfill_all_tables(self) -> bool:
        return self.alter_backfill == 'database'

    @classmethod
    def from_args(cls, args) -> 'EngineConfig':
        """Construye la configuración desde un argparse.Namespace."""
        return cls(
            strict_parse=getattr(args, 'strict', False),
            strict_insert=getattr(args, 'strict_insert', False),
            alter_backfill=getattr(args, 'alter_scope', 'database'),
            column_width=getattr(args, 'column_width', 15),
        )
