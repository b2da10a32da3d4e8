from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class AiServiceError(Exception):
    code: str
    message: str
    details: Optional[Any] = None
    http_status: int = 500

    def __str__(self) -> str:
        return self.message

    def to_contract_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details is not None:
            payload["details"] = self.details
        return payload


class InputValidationError(AiServiceError):
    def __init__(self, message: str, code: str = "INVALID_INPUT", details: Any = None) -> None:
        super().__init__(code=code, message=message, details=details, http_status=400)


class ConfigurationError(AiServiceError):
    def __init__(self, message: str) -> None:
        super().__init__(code="CONFIGURATION_ERROR", message=message, http_status=500)


class GenerationError(AiServiceError):
    """Anything that went wrong between sending the prompt and holding a
    complete ProductContent. Only the description is exposed to callers."""

    def __init__(self, message: str, code: str = "GENERATION_FAILED") -> None:
        super().__init__(code=code, message=message, http_status=500)

    def to_contract_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": f"Internal Server Error: {self.message}",
        }


class TransportError(GenerationError):
    def __init__(self, message: str) -> None:
        super().__init__(message, code="TRANSPORT_ERROR")


class ParseError(GenerationError):
    def __init__(self, message: str, raw_text: str | None) -> None:
        super().__init__(message, code="LLM_OUTPUT_INVALID")
        self.raw_text = raw_text


class SchemaViolationError(GenerationError):
    def __init__(self, message: str, missing_fields: list[str] | None = None) -> None:
        super().__init__(message, code="LLM_SCHEMA_VIOLATION")
        self.missing_fields = list(missing_fields or [])
