from .session import build_engine, build_sessionmaker, create_schema, drop_schema

__all__ = ["build_engine", "build_sessionmaker", "create_schema", "drop_schema"]
