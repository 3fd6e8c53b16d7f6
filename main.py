import asyncio
import logging

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from menza.api import canteens, reservations, students
from menza.core import config
from menza.repository.repo import repo

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=config.APP_TITLE)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(students.router, prefix="/students", tags=["Students"])
app.include_router(canteens.router, prefix="/canteens", tags=["Canteens"])
app.include_router(reservations.router, prefix="/reservations", tags=["Reservations"])


if config.ENABLE_DEBUG_ROUTES:
    @app.post("/debug/clear", status_code=204, tags=["Utility"])
    async def clear_database():
        try:
            await asyncio.to_thread(repo.clear_all)
        except Exception as e:
            logger.exception("Clearing the store failed")
            raise HTTPException(status_code=500, detail=str(e))
        return Response(status_code=204)


handler = Mangum(app)
