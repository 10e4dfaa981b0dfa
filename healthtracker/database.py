# database.py

from databases import Database
import sqlalchemy
from sqlalchemy.engine import make_url

from .core.config import DATABASE_URL
from .models import Base

database = Database(DATABASE_URL)

# databases 는 async 드라이버를, create_all 은 sync 드라이버를 사용
SYNC_DRIVERS = {
    "sqlite": "sqlite",
    "mysql": "mysql+pymysql",
}


def sync_database_url(url: str = DATABASE_URL) -> str:
    parsed = make_url(url)
    backend = parsed.get_backend_name()
    return parsed.set(drivername=SYNC_DRIVERS.get(backend, backend)).render_as_string(hide_password=False)


def create_tables():
    engine = sqlalchemy.create_engine(sync_database_url())
    try:
        Base.metadata.create_all(engine)
    finally:
        engine.dispose()


def drop_tables():
    engine = sqlalchemy.create_engine(sync_database_url())
    try:
        Base.metadata.drop_all(engine)
    finally:
        engine.dispose()
