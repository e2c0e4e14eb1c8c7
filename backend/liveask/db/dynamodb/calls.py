from __future__ import annotations

from typing import Any, Callable, TypeVar

from botocore.exceptions import BotoCoreError, ClientError

from .errors import ConcurrencyError, EventsDbError, TransportError

T = TypeVar("T")


# Codes a caller may reasonably retry after backing off. Informational only.
_RETRYABLE_CODES = {
    "ProvisionedThroughputExceededException",
    "ThrottlingException",
    "RequestLimitExceeded",
    "InternalServerError",
    "ServiceUnavailable",
}


def _aws_request_id_from_client_error(e: ClientError) -> str | None:
    return (e.response or {}).get("ResponseMetadata", {}).get("RequestId")


def _err_code_from_client_error(e: ClientError) -> str | None:
    return (e.response or {}).get("Error", {}).get("Code")


def map_botocore_error(
    *,
    operation: str,
    table_name: str | None,
    key: dict[str, Any] | None,
    exc: Exception,
) -> EventsDbError:
    if isinstance(exc, EventsDbError):
        return exc

    if isinstance(exc, ClientError):
        code = _err_code_from_client_error(exc) or ""
        aws_request_id = _aws_request_id_from_client_error(exc)

        if code == "ConditionalCheckFailedException":
            return ConcurrencyError(
                message="Concurrency Error",
                operation=operation,
                table_name=table_name,
                key=key,
                aws_request_id=aws_request_id,
                retryable=False,
                cause=exc,
            )

        return TransportError(
            message=f"DynamoDB {operation} failed ({code or 'ClientError'})",
            operation=operation,
            table_name=table_name,
            key=key,
            aws_request_id=aws_request_id,
            retryable=code in _RETRYABLE_CODES,
            cause=exc,
            code=code or None,
        )

    if isinstance(exc, BotoCoreError):
        return TransportError(
            message=f"DynamoDB {operation} failed ({type(exc).__name__})",
            operation=operation,
            table_name=table_name,
            key=key,
            retryable=True,
            cause=exc,
        )

    return TransportError(
        message=f"Unexpected DynamoDB {operation} error",
        operation=operation,
        table_name=table_name,
        key=key,
        retryable=False,
        cause=exc,
    )


def ddb_call(
    operation: str,
    fn: Callable[[], T],
    *,
    table_name: str | None = None,
    key: dict[str, Any] | None = None,
) -> T:
    """Run a single client call, translating failures into `EventsDbError`s.

    There is no retry loop: conflicts and transient failures are handed to the
    caller as typed errors.
    """
    try:
        return fn()
    except Exception as e:  # noqa: BLE001
        mapped = map_botocore_error(
            operation=operation,
            table_name=table_name,
            key=key,
            exc=e,
        )
        if mapped is e:
            raise
        raise mapped from e
