import logging
from pathlib import Path

import click
from dotenv import load_dotenv

from phonecall_graph.orm.connection import DBConnection
from phonecall_graph.util import setup_logging

logger = logging.getLogger("PhoneCall-Graph")


@click.command()
@click.option(
    "--config-path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory containing db.yaml. Falls back to POSTGRES_* environment variables.",
)
@click.option("--drop", is_flag=True, default=False, help="Drop the database instead of creating it.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def main(config_path: Path | None, drop: bool, verbose: bool) -> None:
    load_dotenv()
    setup_logging(verbose)

    conn = DBConnection.from_config(config_path) if config_path else DBConnection.from_env()

    if drop:
        conn.drop_database()
        return

    conn.create_database()
    conn.ping()
    conn.create_schema()
    logger.info(f"Tables ready: {', '.join(conn.get_table_names())}")


if __name__ == "__main__":
    main()
