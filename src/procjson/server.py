"""HTTP transport exposing the process table as JSON."""

import json
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse, Response

from procjson.config import Settings
from procjson.errors import ProcfsError
from procjson.models import ProcessRecord
from procjson.scanner import ProcessScanner

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json; charset=utf-8"
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def encode_records(records: list[ProcessRecord]) -> bytes:
    """Serialize records as a UTF-8 JSON array."""
    return json.dumps(
        [record.to_json() for record in records],
        ensure_ascii=False,
        allow_nan=False,
    ).encode("utf-8")


def create_app(
    settings: Settings | None = None,
    scanner: ProcessScanner | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Every path and method returns the full process table. Docs and the
    OpenAPI schema are disabled so no route shadows the catch-all.
    """
    if settings is None:
        settings = Settings()
    if scanner is None:
        scanner = ProcessScanner(
            proc_root=settings.proc_root,
            policy=settings.scan_policy,
            max_workers=settings.scan_workers,
        )

    app = FastAPI(
        title="procjson",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.scanner = scanner

    # Plain def: FastAPI runs it in its thread pool, off the event loop
    @app.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
    def process_table(request: Request) -> Response:
        """Scan the process table and return it as JSON."""
        scanner: ProcessScanner = request.app.state.scanner
        try:
            records = scanner.read_all()
        except ProcfsError as e:
            logger.error(f"Process table scan failed: {e}")
            return PlainTextResponse(
                f"Failed to read process table: {e}",
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        try:
            body = encode_records(records)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize process table: {e}")
            return PlainTextResponse(
                f"Failed to marshal: {e}",
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(content=body, media_type=JSON_MEDIA_TYPE)

    return app
