from domain.models import Habit
from domain.schemas.tracking_schemas import HabitResponse


class HabitMapper:
    """Mapper for the coach's habit list."""

    @staticmethod
    def to_response(habit: Habit, completed_this_week: int = 0) -> HabitResponse:
        response = HabitResponse.model_validate(habit)
        return response.model_copy(update={"completed_this_week": completed_this_week})
