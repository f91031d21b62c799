"""Data structures of the chat core."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Sender(str, Enum):
    USER = "user"
    BOT = "bot"


class ChatState(str, Enum):
    """Orchestrator states. Only ``IDLE`` accepts new input."""

    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"


class ActionId(str, Enum):
    BROWSE_CARS = "browse_cars"
    CHECK_AVAILABILITY = "check_availability"
    MY_BOOKINGS = "my_bookings"
    PRICING = "pricing"
    HELP = "help"
    OTHER = "other"


class MessageEntry(BaseModel):
    """One entry of the conversation log. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Ordinal assigned by the log, strictly increasing")
    text: str
    sender: Sender
    show_options: bool = Field(default=False, description="Offer quick actions after this entry")


@dataclass(frozen=True)
class QuickAction:
    """A predefined button that runs a deterministic backend query."""

    action_id: ActionId
    label: str


QUICK_ACTIONS: tuple[QuickAction, ...] = (
    QuickAction(ActionId.BROWSE_CARS, "Browse Cars"),
    QuickAction(ActionId.CHECK_AVAILABILITY, "Check Availability"),
    QuickAction(ActionId.MY_BOOKINGS, "My Bookings"),
    QuickAction(ActionId.PRICING, "Rental Pricing"),
    QuickAction(ActionId.HELP, "Help & Support"),
)


def find_quick_action(action_id: ActionId | str) -> QuickAction:
    """Look up a catalog entry; unknown ids map to an ``OTHER`` action labelled with the id."""
    for action in QUICK_ACTIONS:
        if action.action_id == action_id:
            return action
    label = action_id.value if isinstance(action_id, ActionId) else str(action_id)
    return QuickAction(ActionId.OTHER, label.replace("_", " ").title())
