import logging
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

router = APIRouter()
logger = logging.getLogger("assignment.health")

@router.get("/assignments/health")
async def health_check(request: Request):
    client = getattr(request.app.state, "mongo_client", None)
    if client is None:
        return {"status": "ok", "database": "not configured"}
    try:
        await client.admin.command("ping")
    except PyMongoError:
        logger.warning("Ping Mongo fallito", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "degraded", "database": "unreachable"},
        )
    return {"status": "ok", "database": "ok"}
