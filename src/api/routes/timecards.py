"""Timecard check and report endpoints."""

import asyncio
import logging
import time
from typing import Annotated

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Request,
    UploadFile,
    status,
)
from fastapi.responses import Response

from api.dependencies import get_daily_ot_employees, verify_api_key
from api.logging import RequestLog, log_request
from api.models.responses import (
    CheckResponse,
    ErrorCodes,
    FindingResult,
    PayrollTotalsResult,
    RowResult,
    WeekResult,
)
from core.config import MAX_UPLOAD_SIZE_BYTES
from core.engine import evaluate, has_blocking_errors
from models.timecard import TimecardEvaluation
from services.csv_import import load_timecard
from services.reports import generate_report_to_bytes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1")

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def build_check_response(evaluation: TimecardEvaluation) -> CheckResponse:
    """Convert an evaluation into the API response model."""
    context = evaluation.context
    rows = []
    for classified, result in zip(context.rows, evaluation.rows):
        rows.append(
            RowResult(
                day=classified.row.day,
                week_index=result.week_index,
                is_footer=result.is_footer,
                time_hours=round(result.time_hours, 4),
                sick_hours=result.sick_hours,
                reg_hours=result.reg_hours,
                ot_hours=result.ot_hours,
                total_cell=result.total_cell,
                computed_hours=(
                    round(result.computed_hours, 4) if result.computed_hours is not None else None
                ),
                has_error=result.has_error,
                findings=[
                    FindingResult(
                        kind=finding.kind.value,
                        message=finding.render(),
                        params=finding.params,
                    )
                    for finding in result.findings
                ],
            )
        )

    totals = context.payroll_totals
    return CheckResponse(
        employee_name=context.employee.name,
        pay_begin_date=context.employee.pay_begin_date,
        pay_end_date=context.employee.pay_end_date,
        pay_date=context.employee.pay_date,
        policy=context.policy.value,
        has_errors=evaluation.has_errors,
        error_rows=evaluation.error_count,
        payroll_totals=PayrollTotalsResult(
            regular_hours=totals.regular_hours,
            sick_hours=totals.sick_hours,
            overtime_hours=totals.overtime_hours,
            total_hours=totals.total_hours,
        ),
        weekly_summary=[
            WeekResult(
                week_index=week.week_index,
                worked_hours=round(week.worked_hours, 4),
                sick_hours=week.sick_hours,
                reg_hours=week.reg_hours,
                ot_hours=week.ot_hours,
                has_errors=week.has_errors,
            )
            for week in evaluation.weekly_summary
        ],
        rows=rows,
    )


async def read_upload(file: UploadFile, request_log: RequestLog) -> str:
    """
    Validate and decode an uploaded timecard CSV.

    Raises:
        HTTPException: 400 (no file / not text), 415 (not CSV), 413 (too large)
    """
    if not file or not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "No file provided",
                "code": ErrorCodes.INVALID_REQUEST,
                "details": [],
            },
        )

    if not file.filename.lower().endswith(".csv"):
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail={
                "error": "File is not a CSV timecard export",
                "code": ErrorCodes.UNSUPPORTED_MEDIA_TYPE,
                "details": [f"Received: {file.filename}"],
            },
        )

    file_content = await file.read()
    request_log.file_size_bytes = len(file_content)

    if len(file_content) > MAX_UPLOAD_SIZE_BYTES:
        max_mb = MAX_UPLOAD_SIZE_BYTES // (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail={
                "error": f"File exceeds maximum size of {max_mb} MB",
                "code": ErrorCodes.FILE_TOO_LARGE,
                "details": [f"File size: {len(file_content) / (1024*1024):.1f} MB"],
            },
        )

    try:
        return file_content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "File is not UTF-8 text",
                "code": ErrorCodes.INVALID_REQUEST,
                "details": [],
            },
        )


def _evaluate_in_thread(
    text: str, employee_name: str | None, daily_ot_employees: set[str]
) -> TimecardEvaluation:
    context = load_timecard(text, employee_name, daily_ot_employees)
    return evaluate(context)


def _report_in_thread(
    text: str, employee_name: str | None, daily_ot_employees: set[str]
) -> tuple[TimecardEvaluation, bytes | None, str | None]:
    evaluation = _evaluate_in_thread(text, employee_name, daily_ot_employees)
    if has_blocking_errors(evaluation):
        return evaluation, None, None
    excel_bytes, filename = generate_report_to_bytes(evaluation)
    return evaluation, excel_bytes, filename


def _record_evaluation(request_log: RequestLog, evaluation: TimecardEvaluation):
    request_log.employee_name = evaluation.context.employee.name
    request_log.policy = evaluation.context.policy.value
    request_log.rows_evaluated = len(evaluation.rows)
    request_log.rows_with_errors = evaluation.error_count


def _handle_failure(
    exc: Exception, request_log: RequestLog, start_time: float
) -> HTTPException:
    """Log a failed request and turn the exception into an HTTPException."""
    request_log.processing_time_ms = int((time.time() - start_time) * 1000)

    if isinstance(exc, HTTPException):
        request_log.status_code = exc.status_code
        if isinstance(exc.detail, dict):
            request_log.error_code = exc.detail.get("code")
            request_log.error_message = exc.detail.get("error")
            for detail in exc.detail.get("details", []):
                request_log.details.append(("request_error", detail))
        else:
            request_log.error_message = str(exc.detail)
        return exc

    if isinstance(exc, ValueError):
        # TimecardError and other structural problems in the upload
        error_msg = str(exc)
        request_log.status_code = 422
        request_log.error_code = ErrorCodes.VALIDATION_ERROR
        request_log.error_message = error_msg
        request_log.details.append(("validation_error", error_msg))
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": "Timecard could not be read",
                "code": ErrorCodes.VALIDATION_ERROR,
                "details": [error_msg],
            },
        )

    logger.exception("Unexpected error processing %s", request_log.endpoint)
    request_log.status_code = 500
    request_log.error_code = ErrorCodes.INTERNAL_ERROR
    request_log.error_message = str(exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "Internal server error",
            "code": ErrorCodes.INTERNAL_ERROR,
            "details": [],
        },
    )


@router.post("/timecards/check", response_model=CheckResponse)
async def check_timecard_endpoint(
    request: Request,
    file: Annotated[UploadFile, File(description="Timecard CSV export")],
    employee_name: Annotated[
        str | None, Form(description="Override the employee name read from the file")
    ] = None,
    _api_key: str | None = Depends(verify_api_key),
    daily_ot_employees: set[str] = Depends(get_daily_ot_employees),
):
    """
    Check a timecard against its overtime policy.

    Returns every row with its derived hours and rule findings, plus the
    weekly summary.
    """
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/v1/timecards/check",
        method="POST",
        client_ip=get_client_ip(request),
        file_name=file.filename,
    )

    try:
        text = await read_upload(file, request_log)
        evaluation = await asyncio.to_thread(
            _evaluate_in_thread, text, employee_name, daily_ot_employees
        )
        _record_evaluation(request_log, evaluation)
        request_log.status_code = 200
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        return build_check_response(evaluation)

    except Exception as e:
        http_exc = _handle_failure(e, request_log, start_time)
        if http_exc is e:
            raise
        raise http_exc from e

    finally:
        try:
            log_request(request_log)
        except Exception:
            # Don't fail the request if logging fails
            pass


@router.post("/timecards/report")
async def timecard_report_endpoint(
    request: Request,
    file: Annotated[UploadFile, File(description="Timecard CSV export")],
    employee_name: Annotated[
        str | None, Form(description="Override the employee name read from the file")
    ] = None,
    _api_key: str | None = Depends(verify_api_key),
    daily_ot_employees: set[str] = Depends(get_daily_ot_employees),
):
    """
    Export a checked timecard as an Excel workbook.

    Refused with 409 while any row still has rule errors.
    """
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/v1/timecards/report",
        method="POST",
        client_ip=get_client_ip(request),
        file_name=file.filename,
    )

    try:
        text = await read_upload(file, request_log)
        evaluation, excel_bytes, filename = await asyncio.to_thread(
            _report_in_thread, text, employee_name, daily_ot_employees
        )
        _record_evaluation(request_log, evaluation)

        if excel_bytes is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail={
                    "error": "Timecard has rule errors; fix them before exporting",
                    "code": ErrorCodes.TIMECARD_HAS_ERRORS,
                    "details": [
                        message
                        for result in evaluation.rows
                        for message in result.error_messages
                    ],
                },
            )

        request_log.status_code = 200
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        return Response(
            content=excel_bytes,
            media_type=XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    except Exception as e:
        http_exc = _handle_failure(e, request_log, start_time)
        if http_exc is e:
            raise
        raise http_exc from e

    finally:
        try:
            log_request(request_log)
        except Exception:
            # Don't fail the request if logging fails
            pass
