"""
Canned message templates coaches can start a message from.
"""

from dataclasses import dataclass
from typing import Optional

from app.exceptions import NotFoundError


@dataclass(frozen=True)
class MessageTemplate:
    id: str
    name: str
    subject: str
    body: str


MESSAGE_TEMPLATES = [
    MessageTemplate(
        id="welcome",
        name="Welcome message",
        subject="Welcome to nutrition coaching!",
        body=(
            "Hi {{name}},\n\nWelcome to the coaching program! I look forward to "
            "helping you reach your goals.\n\nYou can always reach me here if you "
            "have questions.\n\nBest regards"
        ),
    ),
    MessageTemplate(
        id="checkin",
        name="Weekly check-in",
        subject="Time for your weekly check-in",
        body=(
            "Hi {{name}},\n\nIt's time for your weekly check-in! Remember to log "
            "your weight, mood and energy.\n\nHow is the meal plan going this week?"
        ),
    ),
    MessageTemplate(
        id="mealplan",
        name="Meal plan ready",
        subject="Your new meal plan is ready!",
        body=(
            "Hi {{name}},\n\nYour meal plan for week {{week}} is ready! You can "
            'find it in the app under "Meal plan".\n\nLet me know if you have '
            "any questions."
        ),
    ),
    MessageTemplate(
        id="motivation",
        name="Motivation",
        subject="You're doing great!",
        body=(
            "Hi {{name}},\n\nJust wanted to say you are doing really well! Keep up "
            "the good work.\n\nRemember: small steps lead to big results!"
        ),
    ),
    MessageTemplate(
        id="reminder",
        name="Booking reminder",
        subject="Reminder: our meeting tomorrow",
        body=(
            "Hi {{name}},\n\nThis is a friendly reminder about our meeting "
            "tomorrow.\n\nIf you need to change the time, just let me know.\n\n"
            "See you!"
        ),
    ),
]

_TEMPLATES_BY_ID = {t.id: t for t in MESSAGE_TEMPLATES}


def get_template(template_id: str) -> MessageTemplate:
    template = _TEMPLATES_BY_ID.get(template_id)
    if template is None:
        raise NotFoundError(f"Message template '{template_id}' not found")
    return template


def render_template(
    template_id: str, name: Optional[str] = None, week: Optional[int] = None
) -> tuple[str, str]:
    """
    Fill in a template for one recipient.

    ``{{name}}`` is replaced in subject and body, ``{{week}}`` in the body only.
    Placeholders without a value are left in place so the coach can edit them.

    Returns:
        (subject, body)
    """
    template = get_template(template_id)
    subject, body = template.subject, template.body
    if name:
        subject = subject.replace("{{name}}", name)
        body = body.replace("{{name}}", name)
    if week is not None:
        body = body.replace("{{week}}", str(week))
    return subject, body
