from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from orgteams.config import CORS_ORIGINS, LOG_LEVEL
from orgteams.db.database import init_db
from orgteams.logging import configure_logging
from orgteams.routes import team

configure_logging(LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield


# Create FastAPI app
app = FastAPI(title="Org Teams", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(team.router)

@app.get("/ping")
def ping():
    return {"message": "pong"}
