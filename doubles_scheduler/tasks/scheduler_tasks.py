"""
Celery tasks for schedule generation.
"""

from doubles_scheduler.core.celery_app import celery_app
from doubles_scheduler.core.logging_config import get_logger
from doubles_scheduler.api.schemas import ScheduleRequest, to_player, build_schedule_response
from doubles_scheduler.services.sheets_reader import RosterReader

logger = get_logger(__name__)


@celery_app.task(bind=True, name="generate_doubles_schedule")
def generate_schedule_task(self, payload: dict):
    """
    Async task to generate a doubles schedule.

    Args:
        payload: A ScheduleRequest as JSON-compatible dict

    Returns:
        dict: ScheduleResponse data, or an error description
    """
    try:
        request = ScheduleRequest.model_validate(payload)
        settings = request.settings.to_settings()

        if request.players is not None:
            players = [to_player(p, settings.max_level) for p in request.players]
        else:
            self.update_state(state="PROGRESS", meta={"status": "Loading roster from Google Sheets..."})
            players = RosterReader().load_roster(settings.max_level)

        self.update_state(state="PROGRESS", meta={"status": f"Scheduling {len(players)} players..."})
        return build_schedule_response(players, settings).model_dump(mode="json")

    except Exception as e:
        logger.exception("Error in generate_schedule_task")
        return {
            "success": False,
            "message": f"Schedule generation failed: {str(e)}",
            "error": str(e)
        }
