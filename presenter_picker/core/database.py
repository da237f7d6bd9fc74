# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""SQLAlchemy engine singleton."""
from sqlalchemy import create_engine

from presenter_picker.core.config import settings

_connect_args = (
    {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
)

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args,
)
