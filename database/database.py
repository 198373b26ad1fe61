from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.config_loader import load_config

# DATABASE_URL in the environment overrides config.yaml
DATABASE_URL = load_config().database.url

engine = create_engine(DATABASE_URL, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
