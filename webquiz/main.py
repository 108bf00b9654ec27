import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from webquiz.core.config import settings
from webquiz.core.errors import QuizEngineError
from webquiz.core.logging import configure_logging
from webquiz.routers import auth, misc, quiz, users


if not settings.SECRET_KEY:
    raise RuntimeError("SECRET_KEY is required")

configure_logging()
logger = logging.getLogger("webquiz")

app = FastAPI(title="Web Quiz Engine API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(o).rstrip("/") for o in settings.CORS_ORIGINS] or ["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(QuizEngineError)
async def quiz_engine_error_handler(request: Request, exc: QuizEngineError):
    logger.debug("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0]
    field = ".".join(str(p) for p in first["loc"] if p != "body")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": f"{field}: {first['msg']}" if field else first["msg"]},
    )


app.include_router(auth.router)
app.include_router(misc.router)
app.include_router(quiz.router)
app.include_router(users.router)

@app.get("/")
def root():
    return {"message": "Web Quiz Engine API"}
