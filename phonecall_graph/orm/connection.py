import logging
import os
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy import URL, Engine, create_engine, inspect, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, scoped_session, sessionmaker

from phonecall_graph.exceptions import DatabaseUnavailableError, MissingDBNameError

logger = logging.getLogger("PhoneCall-Graph")


@dataclass
class DBConnection:
    """Database connection configuration."""

    host: str
    port: int
    username: str
    password: str
    database: str | None = None
    pool_size: int = 5
    max_overflow: int = 10

    @property
    def db_url(self) -> URL:
        """Construct the SQLAlchemy database URL."""
        return URL.create(
            "postgresql+psycopg",
            username=self.username,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )

    @property
    def safe_db_url(self) -> str:
        """The database URL with the password masked, for logging."""
        return self.db_url.render_as_string(hide_password=True)

    def get_engine(self) -> Engine:
        """Create a pooled SQLAlchemy engine using the connection configuration."""
        return create_engine(
            self.db_url,
            pool_pre_ping=True,
            pool_size=self.pool_size,
            max_overflow=self.max_overflow,
        )

    def get_session_factory(self, engine: Engine | None = None) -> sessionmaker[Session]:
        """Create a SQLAlchemy session factory using the connection configuration.

        Args:
            engine: Engine to bind. A new pooled engine is created when omitted.
        """
        return sessionmaker(bind=engine or self.get_engine())

    def get_scoped_session_factory(self, engine: Engine | None = None) -> scoped_session[Session]:
        """Create a thread-safe scoped SQLAlchemy session factory."""
        return scoped_session(self.get_session_factory(engine))

    def ping(self, engine: Engine | None = None) -> None:
        """Run a trivial query to make sure the database is reachable.

        Raises:
            DatabaseUnavailableError: If no connection can be established.
        """
        owned = engine is None
        engine = engine or self.get_engine()
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except OperationalError as e:
            raise DatabaseUnavailableError(self.safe_db_url) from e
        finally:
            if owned:
                engine.dispose()

    def create_schema(self, engine: Engine | None = None) -> None:
        """Create the caller and phone_call tables if they do not exist yet.

        There are no migrations: existing tables are left untouched.
        """
        from phonecall_graph.orm.schema import Base

        owned = engine is None
        engine = engine or self.get_engine()
        try:
            Base.metadata.create_all(engine)
            logger.info(f"Schema ensured on '{self.safe_db_url}': {', '.join(Base.metadata.tables)}")
        finally:
            if owned:
                engine.dispose()

    def drop_schema(self, engine: Engine | None = None) -> None:
        """Drop the caller and phone_call tables if they exist."""
        from phonecall_graph.orm.schema import Base

        owned = engine is None
        engine = engine or self.get_engine()
        try:
            Base.metadata.drop_all(engine)
            logger.info(f"Schema dropped on '{self.safe_db_url}'")
        finally:
            if owned:
                engine.dispose()

    def get_table_names(self) -> list[str]:
        engine = self.get_engine()
        try:
            return inspect(engine).get_table_names()
        finally:
            engine.dispose()

    def create_database(self) -> bool:
        if self.database is None:
            raise MissingDBNameError

        from phonecall_graph.orm.util import create_database

        return create_database(
            host=self.host,
            port=self.port,
            user=self.username,
            password=self.password,
            database=self.database,
        )

    def drop_database(self) -> bool:
        if self.database is None:
            raise MissingDBNameError

        from phonecall_graph.orm.util import drop_database

        return drop_database(
            host=self.host,
            port=self.port,
            user=self.username,
            password=self.password,
            database=self.database,
            force=True,
        )

    def terminate_connections(self) -> None:
        """Terminate all connections to this database except the current one."""
        if self.database is None:
            raise MissingDBNameError

        from phonecall_graph.orm.util import terminate_connections

        terminate_connections(
            host=self.host,
            port=self.port,
            user=self.username,
            password=self.password,
            database=self.database,
        )

    @classmethod
    def from_config(cls, config_path: Path) -> "DBConnection":
        """Load database connection configuration from a YAML file.

        Args:
            config_path: Directory containing a ``db.yaml`` file.
        Returns:
            DBConnection instance with loaded configuration.
        """
        from omegaconf import DictConfig, OmegaConf

        cfg = OmegaConf.load(Path(config_path) / "db.yaml")
        if not isinstance(cfg, DictConfig):
            raise TypeError("db.yaml must be a YAML mapping.")  # noqa: TRY003

        password = os.environ.get("POSTGRES_PASSWORD", cfg.get("password"))
        if password is None:
            raise ValueError("Database password not found in config or POSTGRES_PASSWORD env variable.")  # noqa: TRY003

        return cls(
            host=cfg.host,
            port=int(cfg.port),
            username=cfg.user,
            password=str(password),
            database=cfg.get("database"),
            pool_size=int(cfg.get("pool_size", 5)),
            max_overflow=int(cfg.get("max_overflow", 10)),
        )

    @classmethod
    def from_env(cls) -> "DBConnection":
        """Load database connection configuration from environment variables.

        Returns:
            DBConnection instance with loaded configuration.
        """
        host = os.getenv("POSTGRES_HOST", "localhost")
        port = int(os.getenv("POSTGRES_PORT", "5432"))
        username = os.getenv("POSTGRES_USER")
        password = os.getenv("POSTGRES_PASSWORD")
        database = os.getenv("POSTGRES_DB", None)

        if not all([host, port, username, password]):
            raise ValueError("Missing required database environment variables.")  # noqa: TRY003

        return cls(
            host=host,
            port=port,
            username=str(username),
            password=str(password),
            database=database,
        )
