import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from pymongo.database import Database

from src.api import api_router
from src.config import settings
from src.database.mongo.core import close_mongo, get_mongo, init_mongo, open_mongo, ping_mongo
from src.utils.exceptions import register_exception_handlers

logger = logging.getLogger(__name__)

def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

configure_logging(settings.log_level)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup operations
    client = open_mongo(settings.student_mongo_url)
    app.state.mongo_client = client
    init_mongo(client)
    yield
    # on-shutdown operations
    close_mongo(client)

if settings.app_env == "production":
    # In production: disable Swagger UI and /docs endpoints
    app = FastAPI(lifespan=lifespan, docs_url=None, redoc_url=None, openapi_url=None)
else:
    # In development: keep docs enabled
    app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

@app.get("/", tags=["Health"])
def read_root():
    return {"message": "Student Registration API is running!"}

@app.get("/health", tags=["Health"])
def mongo_health(db: Database = Depends(get_mongo)):
    try:
        ping_mongo(db.client)
        return {"message": "Successfully accessed MongoDB"}
    except Exception as e:
        logger.error("MongoDB health check failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error accessing MongoDB: {str(e)}",
        )

app.include_router(api_router, prefix="/api")

if __name__ == "__main__":
    import uvicorn
    logger.info("Starting server on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
