"""Root greeting endpoint."""

from fastapi import APIRouter

from awibi_api.api.schemas import GREETING, RootResponse

router = APIRouter(tags=["Root"])


@router.get("/", response_model=RootResponse)
def read_root():
    """Return the API greeting."""
    return {"message": GREETING}
