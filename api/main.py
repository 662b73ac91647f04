from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging

from dotenv import load_dotenv
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from core import db, errors, settings
from portfolio import router as portfolio_router

load_dotenv()

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pool per process, connected on first query; serverless hosts keep
    # it at a single connection.
    app.state.db = db.create_database()
    try:
        yield
    finally:
        await app.state.db.close()
        app.state.db = None


app = FastAPI(title="Portfolio API", version=API_VERSION, lifespan=lifespan)

# Only the portfolio front-ends may call this API from a browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type"],
)

errors.install(app)

app.include_router(portfolio_router.router, tags=["portfolio"])


@app.get("/")
def root() -> dict:
    return {
        "message": "Portfolio API",
        "version": API_VERSION,
        "endpoints": {
            "health": "/health",
            "getData": "/getData?table=project|skill&id=optional",
            "addData": "POST /addData",
            "updateData": "PUT /updateData",
            "deleteData": "DELETE /deleteData",
        },
    }


@app.get("/health")
async def health(database: db.Database = Depends(db.get_db)):
    try:
        rows = await database.fetch_all("SELECT 1")
    except Exception as exc:
        logger.exception("healthcheck_failed")
        return JSONResponse(
            status_code=500,
            content={"error": "DB unreachable", "details": str(exc)},
        )
    logger.info("healthcheck_ok rows=%s", rows)
    return {
        "status": "ok",
        "database": "connected",
        "date": datetime.now(timezone.utc).isoformat(),
    }


def run() -> None:
    """
    Start a local server. In production the hosting layer imports `main:app`
    and this only logs.
    """
    settings.configure_logging()
    if settings.is_production():
        logger.info("APP_ENV=production, not starting a listener")
        return
    logger.info("portfolio api listening on http://localhost:%s", settings.port())
    uvicorn.run(app, host="0.0.0.0", port=settings.port())


if __name__ == "__main__":
    run()
