import logging

import uvicorn
from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .contracts_models import (
    PRODUCT_NAME_REQUIRED,
    ErrorResponse,
    GenerateContentRequest,
    ProductContent,
)
from .services.errors import AiServiceError, ConfigurationError, InputValidationError, ParseError
from .services.jobs import ContentGenerator, generate_product_content
from .services.pipeline.gemini_client import GeminiContentClient

logger = logging.getLogger("product-seo-ai")

MISSING_API_KEY_MESSAGE = (
    "خطای پیکربندی سرور: کلید API (API_KEY) تنظیم نشده است. "
    "لطفاً با مدیر سیستم تماس بگیرید."
)


def _error_response(status_code: int, code: str, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"code": code, "message": message},
        headers=headers,
    )


def _validation_message(exc: RequestValidationError) -> str:
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        if "productName" in loc or "product_name" in loc:
            return PRODUCT_NAME_REQUIRED
        if loc == ["body"] and error.get("type") == "missing":
            return PRODUCT_NAME_REQUIRED
        if error.get("type") in {"json_invalid", "model_attributes_type"}:
            return "Request body must be a JSON object."
    first = exc.errors()[0] if exc.errors() else {}
    where = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"Invalid request body: {where or 'body'}: {first.get('msg', 'invalid value')}"


def build_generation_client(settings: Settings) -> ContentGenerator | None:
    if not settings.has_api_key():
        logger.warning("API_KEY is not set; /api/generate will answer with a configuration error.")
        return None
    logger.info("Gemini client ready model=%s timeout=%ss", settings.GEMINI_MODEL, settings.REQUEST_TIMEOUT_SEC)
    return GeminiContentClient.from_settings(settings)


def create_app(
    settings: Settings | None = None,
    generation_client: ContentGenerator | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    app = FastAPI(title="Product SEO Content Service", version="1.0.0")
    app.state.settings = settings
    app.state.generation_client = generation_client or build_generation_client(settings)

    @app.exception_handler(AiServiceError)
    async def ai_service_error_handler(request: Request, exc: AiServiceError):
        logger.warning("AI service error at %s: %s", request.url.path, exc.message)
        return JSONResponse(status_code=exc.http_status, content=exc.to_contract_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        logger.info("Rejected request at %s: %s", request.url.path, message)
        return _error_response(status.HTTP_400_BAD_REQUEST, "INVALID_INPUT", message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            return _error_response(
                exc.status_code,
                "METHOD_NOT_ALLOWED",
                f"Method {request.method} Not Allowed",
                headers=exc.headers,
            )
        return _error_response(
            exc.status_code,
            "HTTP_ERROR",
            str(exc.detail),
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception at %s", request.url.path)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_ERROR",
            "Internal Server Error: An unexpected error occurred.",
        )

    @app.get("/health", status_code=200)
    async def health_get():
        return {"status": "ok"}

    @app.head("/health", status_code=200)
    async def health_head():
        return Response(status_code=200)

    @app.post(
        "/api/generate",
        response_model=ProductContent,
        response_model_by_alias=True,
        response_model_exclude_none=True,
        status_code=status.HTTP_200_OK,
        responses={
            400: {"model": ErrorResponse},
            405: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
        },
    )
    async def generate_content(payload: GenerateContentRequest, request: Request):
        client = request.app.state.generation_client
        try:
            if client is None:
                raise ConfigurationError(MISSING_API_KEY_MESSAGE)
            logger.info(
                "generate product_name_chars=%s image=%s nuts=%s",
                len(payload.product_name),
                payload.product_image is not None,
                payload.is_nuts_or_dried_fruit,
            )
            return await generate_product_content(payload, client)
        except InputValidationError as exc:
            logger.info("Rejected request at %s (%s): %s", request.url.path, exc.code, exc.message)
            return JSONResponse(status_code=exc.http_status, content=exc.to_contract_dict())
        except ParseError as exc:
            logger.warning(
                "Generation failed (%s): %s raw_chars=%s",
                exc.code,
                exc.message,
                len(exc.raw_text or ""),
            )
            return JSONResponse(status_code=exc.http_status, content=exc.to_contract_dict())
        except AiServiceError as exc:
            logger.warning("Request failed (%s): %s", exc.code, exc.message)
            return JSONResponse(status_code=exc.http_status, content=exc.to_contract_dict())
        except Exception as exc:
            logger.exception("Unexpected generation failure")
            return _error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "GENERATION_FAILED",
                f"Internal Server Error: {exc}",
            )

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "product_seo.main:app",
        host=settings.AI_SERVICE_HOST,
        port=settings.AI_SERVICE_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
