"""
API routes for schedule generation and management.
"""

from fastapi import APIRouter, HTTPException, Response
from typing import Dict, List
from datetime import datetime
from celery.result import AsyncResult
import gspread

from doubles_scheduler.api.schemas import (
    PlayerModel, ScheduleRequest, ScheduleResponse, SwapRequest, SwapResponse,
    MatchListRequest, MatchResultRequest,
    to_player, from_player, to_match, from_match, build_schedule_response
)
from doubles_scheduler.models import Player
from doubles_scheduler.services.manual_adjust import swap_players, CellNotFoundError
from doubles_scheduler.services.validator import ScheduleValidator
from doubles_scheduler.services.csv_export import export_schedule_csv
from doubles_scheduler.services.sheets_reader import RosterReader
from doubles_scheduler.services.sheets_writer import ScheduleWriter
from doubles_scheduler.core.celery_app import celery_app
from doubles_scheduler.core.logging_config import get_logger
from doubles_scheduler.tasks.scheduler_tasks import generate_schedule_task

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["schedule"])


def _sheet_error(action: str, e: Exception) -> HTTPException:
    logger.exception("Failed to %s", action)
    if isinstance(e, ValueError):
        # Raised by get_google_credentials when nothing is configured
        return HTTPException(status_code=503, detail=f"Failed to {action}: {str(e)}")
    return HTTPException(status_code=502, detail=f"Failed to {action}: {str(e)}")


def _roster(request: ScheduleRequest) -> List[Player]:
    max_level = request.settings.max_level
    if request.players is not None:
        return [to_player(p, max_level) for p in request.players]
    try:
        return RosterReader().load_roster(max_level)
    except (gspread.exceptions.GSpreadException, ValueError) as e:
        raise _sheet_error("load roster", e)


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@router.get("/roster", response_model=List[PlayerModel])
async def get_roster():
    """Get the roster from the roster sheet."""
    try:
        players = RosterReader().load_roster()
    except (gspread.exceptions.GSpreadException, ValueError) as e:
        raise _sheet_error("load roster", e)
    return [from_player(p) for p in players]


@router.post("/schedule", response_model=ScheduleResponse)
async def generate_schedule(request: ScheduleRequest):
    """
    Generate a schedule.

    Uses the roster in the request body, or the roster sheet when the body has
    none. An empty schedule is a normal response (success=false), not an error.
    """
    settings = request.settings.to_settings()
    players = _roster(request)
    try:
        return build_schedule_response(players, settings)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/schedule/swap", response_model=SwapResponse)
async def swap_schedule_players(request: SwapRequest):
    """
    Exchange two players between positions of an existing schedule.

    Fairness limits are not re-checked unless `revalidate` is set.
    """
    max_level = request.settings.max_level
    try:
        matches = [to_match(m, max_level) for m in request.matches]
        swapped = swap_players(matches, request.a.to_cell(), request.b.to_cell())
    except CellNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    validation = None
    if request.revalidate:
        validation = ScheduleValidator(request.settings.to_settings()).validate_schedule(swapped).to_dict()
    return SwapResponse(matches=[from_match(m) for m in swapped], validation=validation)


@router.post("/schedule/validate")
async def validate_schedule(request: MatchListRequest) -> Dict:
    """Check a schedule (for example after manual edits) against the session limits."""
    try:
        matches = [to_match(m, request.settings.max_level) for m in request.matches]
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return ScheduleValidator(request.settings.to_settings()).validate_schedule(matches).to_dict()


@router.post("/schedule/export")
async def export_schedule(request: MatchListRequest):
    """Download the schedule as CSV."""
    try:
        matches = [to_match(m, request.settings.max_level) for m in request.matches]
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    day = matches[0].start.strftime("%Y-%m-%d") if matches else datetime.now().strftime("%Y-%m-%d")
    return Response(
        content=export_schedule_csv(matches),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="doubles-schedule-{day}.csv"'},
    )


@router.post("/schedule/sheet")
async def write_schedule_sheet(request: MatchListRequest):
    """Write the schedule to a sheet in the configured spreadsheet."""
    try:
        matches = [to_match(m, request.settings.max_level) for m in request.matches]
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    try:
        sheet_name = ScheduleWriter().write_schedule(matches)
    except (gspread.exceptions.GSpreadException, ValueError) as e:
        raise _sheet_error("write schedule", e)
    return {"ok": True, "sheet": sheet_name, "rows": len(matches)}


@router.post("/results")
async def record_match_result(request: MatchResultRequest):
    """Append a match result, or update the existing row with the same match id."""
    try:
        return ScheduleWriter().upsert_match_result(request.model_dump())
    except (gspread.exceptions.GSpreadException, ValueError) as e:
        raise _sheet_error("record result", e)


@router.post("/schedule/async")
async def generate_schedule_async(request: ScheduleRequest):
    """
    Start async schedule generation task.

    Returns:
        dict: Task ID for polling status
    """
    try:
        task = generate_schedule_task.delay(request.model_dump(mode="json"))
    except Exception as e:
        logger.exception("Failed to start schedule task")
        raise HTTPException(status_code=500, detail=f"Failed to start task: {str(e)}")

    return {
        "task_id": task.id,
        "status": "PENDING",
        "message": "Schedule generation started"
    }


@router.get("/schedule/status/{task_id}")
async def get_schedule_status(task_id: str):
    """
    Get status of async schedule generation task.

    Args:
        task_id: Celery task ID
    """
    task_result = AsyncResult(task_id, app=celery_app)

    if task_result.state == "PENDING":
        return {"task_id": task_id, "status": "PENDING", "message": "Task is waiting to start..."}
    if task_result.state == "PROGRESS":
        return {
            "task_id": task_id,
            "status": "PROGRESS",
            "message": (task_result.info or {}).get("status", "Processing...")
        }
    if task_result.state == "SUCCESS":
        return {"task_id": task_id, "status": "SUCCESS", "result": task_result.result}
    if task_result.state == "FAILURE":
        return {"task_id": task_id, "status": "FAILURE", "message": str(task_result.info)}
    return {"task_id": task_id, "status": task_result.state, "message": f"Task state: {task_result.state}"}
