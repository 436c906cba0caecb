from typing import Dict, Optional


class SessionStore:
    """In-memory conversation state per user.

    Holds the goal wizard step and the counter awaiting a typed number.
    Lost on restart; an interrupted wizard starts over from the first step.
    """

    def __init__(self):
        self._setup_steps: Dict[str, int] = {}
        self._pending_inputs: Dict[str, str] = {}

    def start_setup(self, user_id: str):
        self._pending_inputs.pop(user_id, None)
        self._setup_steps[user_id] = 0

    def setup_step(self, user_id: str) -> Optional[int]:
        return self._setup_steps.get(user_id)

    def set_setup_step(self, user_id: str, step: int):
        self._setup_steps[user_id] = step

    def finish_setup(self, user_id: str):
        self._setup_steps.pop(user_id, None)

    def await_input(self, user_id: str, field: str):
        self._pending_inputs[user_id] = field

    def pending_input(self, user_id: str) -> Optional[str]:
        return self._pending_inputs.get(user_id)

    def clear_input(self, user_id: str):
        self._pending_inputs.pop(user_id, None)

    def clear(self, user_id: str):
        self._setup_steps.pop(user_id, None)
        self._pending_inputs.pop(user_id, None)
