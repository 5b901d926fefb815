import hmac
import os
from fastapi import Header, HTTPException
from medreminder.core.logging_config import LOGGER

def require_internal_key(x_internal_key: str = Header(...)) -> None:
    """Guards routes that write reminder rows; the key is shared with the scheduler job."""
    secret = os.getenv("INTERNAL_SERVICE_SECRET")
    if not secret:
        LOGGER.error("INTERNAL_SERVICE_SECRET is not set; refusing write")
        raise HTTPException(status_code=500, detail="Internal service secret not configured.")

    if not hmac.compare_digest(x_internal_key.encode(), secret.encode()):
        raise HTTPException(status_code=401, detail="Unauthorized service call.")
