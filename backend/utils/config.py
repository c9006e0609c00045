"""Configuration from environment."""
import os

PORT = int(os.environ.get("PORT", "3000"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]

MONGO_URL = os.environ.get("MONGO_URL", "mongodb://127.0.0.1:27017")
MONGO_COLLECTION = os.environ.get("MONGO_COLLECTION", "restaurants")
# Applied to both server selection and socket reads so a store call never hangs a worker.
MONGO_TIMEOUT_MS = int(os.environ.get("MONGO_TIMEOUT_MS", "5000"))

# When TESTING=true, use a test database so tests never touch production.
if os.environ.get("TESTING") == "true":
    MONGO_DB = os.environ.get("TESTING_MONGO_DB", "restaurants_test")
else:
    MONGO_DB = os.environ.get("MONGO_DB", "tutorial")
