from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

__all__ = [
    'TRANSACTION_ADDED', 'GOAL_ADDED', 'GOAL_UPDATED', 'GOAL_DELETED', 'INVESTMENT_ADDED',
    'Event', 'EventBus', 'goal_completed_handler', 'create_event_bus',
]


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], dict]


class EventBus:
    """Synchronous bus: handlers run in subscription order, results come back as a list."""

    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._handlers.setdefault(name, []).append(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        handlers = self._handlers.get(name)
        if not handlers:
            return []
        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        # copy so a handler may unsubscribe itself while running
        return [handler(event, payload) for handler in list(handlers)]

    def unsubscribe(self, name: str, handler: Handler) -> None:
        handlers = self._handlers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)


TRANSACTION_ADDED = "TRANSACTION_ADDED"
GOAL_ADDED = "GOAL_ADDED"
GOAL_UPDATED = "GOAL_UPDATED"
GOAL_DELETED = "GOAL_DELETED"
INVESTMENT_ADDED = "INVESTMENT_ADDED"


def goal_completed_handler(event: Event, payload: dict) -> dict:
    # payload carries the goal state before and after the investment
    if payload.get("completed") and not payload.get("was_completed"):
        return {
            "alert": f"Goal reached: {payload.get('goal_name', '')} "
                     f"({payload.get('current_amount', 0):,.0f} / {payload.get('target_amount', 0):,.0f})",
            "goal_id": payload.get("goal_id"),
        }
    return {}


def create_event_bus() -> EventBus:
    bus = EventBus()
    bus.subscribe(INVESTMENT_ADDED, goal_completed_handler)
    return bus
