"""
Conexão com a base de dados (SQLAlchemy)
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from ..config import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # SQLite só é usado em testes/desenvolvimento local
    connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.DATABASE_URL,
    connect_args=connect_args,
    pool_pre_ping=True
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dependência do FastAPI: uma sessão por request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
