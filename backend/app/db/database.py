from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def normalize_url(url):
    # psycopg3 driver instead of psycopg2
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url.replace("postgresql://", "postgresql+psycopg://", 1)


def build_engine(url, timeout=5):
    """Create an engine whose connects and statements are bounded by `timeout` seconds."""
    url = normalize_url(url)

    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False, "timeout": timeout}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise every checkout sees an empty database
            kwargs["poolclass"] = StaticPool
        return create_engine(url, future=True, **kwargs)

    return create_engine(
        url,
        pool_size=20,
        max_overflow=40,
        pool_pre_ping=True,
        pool_timeout=timeout,
        connect_args={
            "connect_timeout": max(int(timeout), 1),
            "options": f"-c statement_timeout={int(timeout * 1000)}",
        },
        future=True,
    )


def build_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
