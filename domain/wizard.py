"""
Four-step customer creation wizard.

Holds the partial form while a coach walks through the steps and only
produces a ``CustomerCreate`` once the required fields are present.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from app.exceptions import ServiceValidationError
from domain.schemas.customer_schemas import CustomerCreate

STEP_FIELDS: Dict[int, tuple] = {
    1: ("full_name", "email", "phone", "birth_date", "gender"),
    2: ("height_cm", "weight_kg", "weight_goal_kg", "activity_level"),
    3: (
        "subscription_type",
        "subscription_start_date",
        "subscription_end_date",
        "status",
    ),
    4: ("notes", "tags"),
}
STEP_TITLES = {
    1: "Basic info",
    2: "Goals",
    3: "Subscription",
    4: "Notes & tags",
}
REQUIRED_FIELDS: Dict[int, tuple] = {1: ("full_name", "email")}
FIRST_STEP = 1
LAST_STEP = 4


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


@dataclass
class CustomerWizard:
    step: int = FIRST_STEP
    data: Dict[str, Any] = field(default_factory=dict)
    tags: List[str] = field(default_factory=list)

    def next_step(self) -> int:
        self.step = min(self.step + 1, LAST_STEP)
        return self.step

    def prev_step(self) -> int:
        self.step = max(self.step - 1, FIRST_STEP)
        return self.step

    def go_to(self, step: int) -> int:
        self.step = max(FIRST_STEP, min(step, LAST_STEP))
        return self.step

    def update(self, **fields) -> None:
        for key, value in fields.items():
            if key == "tags":
                for tag in value or []:
                    self.add_tag(tag)
            else:
                self.data[key] = value

    def add_tag(self, tag: str) -> bool:
        """Add a trimmed tag; empty and duplicate tags are ignored"""
        tag = (tag or "").strip()
        if not tag or tag in self.tags:
            return False
        self.tags.append(tag)
        return True

    def remove_tag(self, tag: str) -> None:
        if tag in self.tags:
            self.tags.remove(tag)

    def missing_fields(self, step: Optional[int] = None) -> List[str]:
        """Required fields still blank, for one step or the whole wizard"""
        steps = [step] if step is not None else list(STEP_FIELDS)
        missing = []
        for s in steps:
            for name in REQUIRED_FIELDS.get(s, ()):
                if _blank(self.data.get(name)):
                    missing.append(name)
        return missing

    def step_is_valid(self, step: Optional[int] = None) -> bool:
        return not self.missing_fields(self.step if step is None else step)

    def can_submit(self) -> bool:
        return not self.missing_fields()

    def submit(self) -> CustomerCreate:
        missing = self.missing_fields()
        if missing:
            raise ServiceValidationError(
                "Required fields are missing",
                details={"missing_fields": missing},
            )
        payload = {k: v for k, v in self.data.items() if not _blank(v)}
        payload["tags"] = list(self.tags)
        try:
            return CustomerCreate(**payload)
        except ValidationError as exc:
            raise ServiceValidationError(
                "Customer data is invalid",
                details={"errors": exc.errors(include_url=False, include_context=False)},
            ) from exc
