"""
ISH Bot relay API with FastAPI
"""
import uvicorn
from fastapi import BackgroundTasks, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from ish_bot.config import Config
from ish_bot.logging_config import get_logger
from ish_bot.models import ChatResponse, ErrorResponse, ExchangeMetadata, HealthResponse
from ish_bot.services import RelayService, RelayValidationError, get_llm_service, get_relay_service

logger = get_logger("ish-api")

app = FastAPI(
    title="ISH Bot API",
    description="Innovatrix Health Bot - multilingual public health assistant",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(message: str, status_code: int, headers: dict = None) -> JSONResponse:
    return JSONResponse(ErrorResponse(error=message).model_dump(), status_code=status_code, headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return error_response("Endpoint not found", 404)
    # Keeps headers such as Allow on 405
    return error_response(str(exc.detail), exc.status_code, headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled_error", path=request.url.path, error_type=type(exc).__name__)
    return error_response("Internal server error", 500)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """API health check endpoint"""
    return HealthResponse()


@app.post("/chat", response_model=ChatResponse)
async def chat(
    request: Request,
    background_tasks: BackgroundTasks,
    relay: RelayService = Depends(get_relay_service)
):
    """
    Relay a user message to the ISH bot.

    Input: {"message": string, "lang": string, "session_id"?: string}
    Output: {"reply": string, "session_id": string, "status": "success"}
    """
    try:
        try:
            payload = await request.json()
        except ValueError:
            payload = None

        metadata = ExchangeMetadata(
            caller_address=request.client.host if request.client else None,
            caller_agent=request.headers.get("User-Agent", "Unknown")
        )
        # Generation blocks on the network, keep it off the event loop
        return await run_in_threadpool(
            relay.handle,
            payload,
            metadata,
            background_tasks.add_task
        )
    except RelayValidationError as e:
        return error_response(str(e), 400)
    except Exception:
        logger.exception("chat_failed")
        return error_response("An unexpected error occurred", 500)


def run() -> None:
    """Start the API server"""
    if not get_llm_service().is_healthy():
        logger.warning("generation_not_configured",
                       missing=Config.missing_generation_settings(),
                       note="replies will use the fallback message")

    logger.info("api_starting", host=Config.API_HOST, port=Config.API_PORT)
    uvicorn.run(app, host=Config.API_HOST, port=Config.API_PORT)


if __name__ == "__main__":
    run()
