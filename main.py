import sys
import os
import logging
from pathlib import Path
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from config.logging_config import setup_logging
from config.settings import settings
from models.index import init_db

setup_logging()
logger = logging.getLogger("main")

init_db()

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("%s started (%s)", settings.APP_NAME, settings.ENVIRONMENT)
    yield

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
# CORS: use our parsed list
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["X-User-Id", "Content-Type"],
)

#load all routes
def load_routes(directory: Path):
    import importlib.util
    routers = []
    for item in sorted(directory.rglob("*_routes.py")):
        spec = importlib.util.spec_from_file_location(item.stem, str(item))
        module = importlib.util.module_from_spec(spec)
        sys.modules[item.stem] = module
        spec.loader.exec_module(module)
        if hasattr(module, "router"):
            routers.append(module.router)
    return routers

for router in load_routes(Path(__file__).parent / "api"):
    app.include_router(router, prefix="/api")

@app.get("/health")
def health_check():
    return {"status": "ok"}

@app.get("/")
def home():
    return {"message": f"Welcome to {settings.APP_NAME}"}

if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", settings.PORT))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=settings.DEBUG)
