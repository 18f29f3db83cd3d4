from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from config.config import Config
from peermap.models.base import Base


class Database:
    """Explicit database handle passed to every repository"""

    def __init__(self, url=None, echo=None):
        self.url = url or Config.DATABASE_URL
        self.engine = create_engine(
            self.url,
            echo=Config.SQL_ECHO if echo is None else echo,
            connect_args={'check_same_thread': False} if self.url.startswith('sqlite') else {}
        )
        # Returned rows stay readable after their session closes
        self.SessionLocal = sessionmaker(
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine
        )

    def init_db(self):
        """Initialize database, create all tables"""
        import peermap.models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def drop_db(self):
        """Drop all tables"""
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self):
        self.engine.dispose()

    @contextmanager
    def get_db(self):
        """Provide a transactional scope for database operations"""
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


class DatabaseManager:
    """Generic insert helper for identity records and fixtures"""

    def __init__(self, database, model_class):
        self.database = database
        self.model_class = model_class

    def create(self, **kwargs):
        """Create a new record"""
        with self.database.get_db() as db:
            instance = self.model_class(**kwargs)
            db.add(instance)
            db.flush()
            db.refresh(instance)
            return instance
