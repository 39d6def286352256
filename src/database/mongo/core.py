import logging
from typing import Optional
from fastapi import Request
from pymongo.database import Database
from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from src.config import MONGO_DATABASE_NAME
from src.database.mongo.service import init_collections

logger = logging.getLogger(__name__)

def open_mongo(url: Optional[str]) -> MongoClient:
    """
    Create the client that owns the connection pool for the lifetime of the process.

    The returned client is stored on `app.state` by the lifespan handler and closed at shutdown.
    """
    if not url:
        raise ValueError("MongoDB URL environment variable not found")
    return MongoClient(url, server_api=ServerApi('1'))

# Send a ping to confirm a successful connection
def ping_mongo(client: MongoClient):
    client.admin.command('ping')

def init_mongo(client: MongoClient) -> Database:
    db = client[MONGO_DATABASE_NAME]
    init_collections(db)
    logger.info("MongoDB collections initialized on database '%s'", MONGO_DATABASE_NAME)
    return db

def close_mongo(client: MongoClient) -> None:
    client.close()
    logger.info("MongoDB client closed")

def get_mongo(request: Request) -> Database:
    """Dependency yielding the database of the client opened at process start."""
    return request.app.state.mongo_client[MONGO_DATABASE_NAME]
