from reconciler.config import get_settings
from reconciler.infrastructure.db.engine import build_engine, build_sessionmaker

settings = get_settings()

engine = build_engine(settings)
AsyncSessionLocal = build_sessionmaker(engine)
