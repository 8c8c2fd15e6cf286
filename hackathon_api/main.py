import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from hackathon_api.config import settings
from hackathon_api.database import Base, engine
from hackathon_api.routers import participants, profiles, stats
from hackathon_api.utils.response import create_response, error_response, handle_exception
from seed import run_seed

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION)

# Auto create tables
Base.metadata.create_all(bind=engine)

# CORS for the registration SPA
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    logger.info("Starting %s v%s", settings.PROJECT_NAME, settings.VERSION)
    if settings.SEED_DEMO_PARTICIPANTS:
        run_seed()


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{field}: {error.get('msg')}" if field else error.get("msg"))
    logger.info("Rejected malformed request on %s", request.url.path)
    return error_response(messages, status.HTTP_400_BAD_REQUEST)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s", request.url.path)
    return handle_exception(exc)


app.include_router(participants.router)
app.include_router(stats.router)
app.include_router(profiles.router)


@app.get("/")
def home():
    return create_response(data={"service": "hackathon-registration", "message": "Hackathon Registration API is running"})


@app.get("/api-info")
def api_info():
    return create_response(
        data={
            "service": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "docs_url": "/docs",
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("hackathon_api.main:app", host="0.0.0.0", port=settings.PORT, reload=True)
