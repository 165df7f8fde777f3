"""Test support routes.

Mounted only when ENABLE_TEST_ROUTES is set. End-to-end runs call the reset
endpoint to start from empty tables with every id sequence back at 1.
"""

from typing import Any

from fastapi import APIRouter, Depends

from blog_api import schemas
from blog_api.core.database import Store
from blog_api.core.validation import validate_payload
from blog_api.dependencies import get_json_body, get_store

router = APIRouter()

# Comments hang off posts, so clearing posts clears comments too
_SCOPES = {
    "all": ("users", "posts", "comments"),
    "users": ("users",),
    "posts": ("posts", "comments"),
}


@router.post("/reset")
def reset_state(payload: Any = Depends(get_json_body), store: Store = Depends(get_store)):
    request = validate_payload(schemas.ResetRequest, payload)
    store.reset(*_SCOPES[request.scope])
    return {"success": True, "message": f"Reset {request.scope}"}
