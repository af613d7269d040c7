from contextlib import asynccontextmanager

from fastapi import FastAPI
from app.clients.backend import BackendClient
from app.core.config import settings
from app.middleware.log_middleware import LogMiddleware
from app.services.print_config import PrintConfigRefresher

@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.backend_client = BackendClient()
    app.state.print_config = PrintConfigRefresher(app.state.backend_client)
    app.state.print_config.start()
    yield
    await app.state.print_config.stop()
    await app.state.backend_client.close()

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan
)

from fastapi.middleware.cors import CORSMiddleware

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(LogMiddleware)

@app.get("/")
async def root():
    return {"message": "Welcome to ClinicSchedule API"}

from app.api.api import api_router
app.include_router(api_router, prefix=settings.API_V1_STR)
