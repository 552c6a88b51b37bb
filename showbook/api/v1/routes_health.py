from fastapi import APIRouter


router = APIRouter(tags=["health"])


@router.get("/health", summary="Basic health check endpoint")
async def health_check():
    return {"status": "ok"}
