import importlib
from pathlib import Path
from config.database import engine, SessionLocal, Base

# Dictionary to store loaded models, keyed by table name
models = {}

PROJECT_ROOT = Path(__file__).parent.parent


# Import every `*_model.py` under `api` so its tables register on Base.metadata
def scan_models(directory: Path):
    for item in sorted(directory.rglob("*_model.py")):
        module_name = ".".join(item.relative_to(PROJECT_ROOT).with_suffix("").parts)
        module = importlib.import_module(module_name)

        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if hasattr(attr, "__tablename__"):
                models[attr.__tablename__] = attr

scan_models(PROJECT_ROOT / "api")

# Create tables in the database
def init_db(bind=engine):
    Base.metadata.create_all(bind=bind)

# Exporting components
__all__ = ["engine", "SessionLocal", "Base", "models", "init_db"]
