"""
MongoDB connection module for the FastAPI application
"""
import re
import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, ConfigurationError

from subify.core.config import settings
from subify.core.errors import StorageError

logger = logging.getLogger(__name__)

# Collection names
SUBMISSIONS_COLLECTION = "submissions"
PLANS_COLLECTION = "plans"
USERS_COLLECTION = "users"

# Global MongoDB client and database instances
mongodb_client: Optional[MongoClient] = None
mongodb_db: Optional[Database] = None


def _resolve_db_name(uri: str) -> str:
    """Use the database named in the connection string, falling back to MONGODB_DB_NAME"""
    uri_db_match = re.search(r"mongodb(?:\+srv)?://[^/]+/([^?]+)", uri)
    if uri_db_match and uri_db_match.group(1):
        return uri_db_match.group(1)
    return settings.MONGODB_DB_NAME


def connect_to_mongodb() -> bool:
    """
    Connect to MongoDB

    Returns:
        True if connection successful, False otherwise
    """
    global mongodb_client, mongodb_db

    if not settings.MONGODB_URI:
        logger.warning("MONGODB_URI not set. MongoDB connection will not be established.")
        return False

    try:
        mongodb_client = MongoClient(
            settings.MONGODB_URI,
            serverSelectionTimeoutMS=5000,  # 5 second timeout
            connectTimeoutMS=10000,  # 10 second connection timeout
        )

        # Test the connection
        mongodb_client.admin.command("ping")

        db_name = _resolve_db_name(settings.MONGODB_URI)
        mongodb_db = mongodb_client[db_name]
        logger.info(f"Connected to MongoDB database '{db_name}'")
        return True

    except ConnectionFailure as e:
        logger.error(f"Failed to connect to MongoDB: {e}")
    except ConfigurationError as e:
        logger.error(f"MongoDB configuration error: {e}")
    except Exception as e:
        logger.error(f"Unexpected error connecting to MongoDB: {e}")

    mongodb_client = None
    mongodb_db = None
    return False


def close_mongodb_connection() -> None:
    """Close MongoDB connection"""
    global mongodb_client, mongodb_db

    if mongodb_client is None:
        return

    client_to_close = mongodb_client
    mongodb_client = None
    mongodb_db = None
    try:
        client_to_close.close()
        logger.info("MongoDB connection closed")
    except Exception as e:
        logger.debug(f"MongoDB close error (non-critical): {e}")


def get_database() -> Optional[Database]:
    """Get MongoDB database instance"""
    return mongodb_db


def get_collection(collection_name: str) -> Optional[Collection]:
    """
    Get MongoDB collection instance

    Args:
        collection_name: Name of the collection

    Returns:
        MongoDB collection instance or None if database not initialized
    """
    if mongodb_db is None:
        logger.error("MongoDB database not initialized. Call connect_to_mongodb() first.")
        return None

    logger.debug(f"Accessing collection '{collection_name}' in database '{mongodb_db.name}'")
    return mongodb_db[collection_name]


def get_required_collection(collection_name: str) -> Collection:
    """
    Get a collection for a service call, failing the request when the database is down

    Raises:
        StorageError: (503) if MongoDB is not connected
    """
    collection = get_collection(collection_name)
    if collection is None:
        raise StorageError(
            f"Database connection unavailable (collection '{collection_name}')",
            unavailable=True,
        )
    return collection


def is_connected() -> bool:
    """
    Check if MongoDB is connected

    Returns:
        True if connected, False otherwise
    """
    if mongodb_client is None:
        logger.debug("MongoDB client is None - not connected")
        return False

    try:
        mongodb_client.admin.command("ping")
        return True
    except Exception as e:
        logger.debug(f"MongoDB ping failed: {e}")
        return False
