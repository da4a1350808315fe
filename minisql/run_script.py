import argparse
import logging
import sys
from typing import Callable, List, Optional

from .core.config import ALTER_BACKFILL_SCOPES, EngineConfig
from .parser.sql_executor import SQLExecutor

PROMPT = "SQL> "


def report(results) -> int:
    """Imprime el primer error (si lo hay) y devuelve el código de salida."""
    for result in results:
        if not result.get('success'):
            print(f"Error: {result.get('error')}", file=sys.stderr)
            return 1
    return 0


def run(content: str, executor: SQLExecutor) -> int:
    return report(executor.execute_script(content))


def interactive(executor: SQLExecutor, read: Callable[[str], str] = input) -> int:
    """Shell interactivo: acumula líneas hasta ';' y ejecuta. Los errores no cortan la sesión."""
    buffer: List[str] = []
    while True:
        try:
            line = read(PROMPT if not buffer else "...> ")
        except EOFError:
            break
        except KeyboardInterrupt:
            print("\nSaliendo...")
            break

        if not buffer and line.strip().lower() == 'exit':
            break
        buffer.append(line)
        if ';' not in line:
            continue

        report(executor.execute_script('\n'.join(buffer)))
        buffer = []
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ejecuta un script SQL sobre una base de datos en memoria")
    parser.add_argument("script", nargs="?", help="Archivo con sentencias SQL (sin él: shell interactivo)")
    parser.add_argument("--strict", action="store_true",
                        help="Error si una sentencia empieza con un token no reconocido")
    parser.add_argument("--strict-insert", action="store_true",
                        help="Rechazar INSERT que no nombra todas las columnas")
    parser.add_argument("--alter-scope", choices=ALTER_BACKFILL_SCOPES, default="database",
                        help="Filas que rellena ALTER TABLE ADD "
                             "(CREATE TABLE nunca rellena filas de otras tablas)")
    parser.add_argument("--column-width", type=int, default=15, help="Ancho de columna en SELECT")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), stream=sys.stderr,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        config = EngineConfig.from_args(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    executor = SQLExecutor(config=config)

    if args.script is None:
        return interactive(executor)

    try:
        with open(args.script, 'r', encoding='utf-8') as f:
            content = f.read()
    except OSError as e:
        print(f"Error: no se puede leer {args.script}: {e}", file=sys.stderr)
        return 2

    return run(content, executor)


if __name__ == '__main__':
    sys.exit(main())
