from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from filecloud.core.config import get_settings
from filecloud.core.errors import register_exception_handlers
from filecloud.core.logging_config import setup_logging
from filecloud.models import Base
from filecloud.models.database import SessionLocal, engine
from filecloud.routers import auth, files
from filecloud.seed import seed_users

settings = get_settings()
setup_logging(settings.log_level, settings.log_file)

Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    db = SessionLocal()
    try:
        seed_users(db, settings.seed_users)
    finally:
        db.close()
    yield


app = FastAPI(title="filecloud", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# include our routers
app.include_router(auth.router)
app.include_router(files.router)


@app.get("/health")
def health():
    return {"status": "ok"}


def run():
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
