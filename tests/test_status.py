import unittest

from carwash.errors import InvalidTransitionError
from carwash.status import AppointmentStatus, ShiftStatus, can_transition, check_transition


class AppointmentLifecycleTests(unittest.TestCase):
    def test_happy_path(self) -> None:
        path = ["scheduled", "confirmed", "in_progress", "completed"]
        for current, target in zip(path, path[1:]):
            check_transition(AppointmentStatus, current, target)

    def test_any_open_state_can_be_cancelled(self) -> None:
        for current in ("scheduled", "confirmed", "in_progress"):
            self.assertTrue(
                can_transition(AppointmentStatus(current), AppointmentStatus.CANCELLED)
            )

    def test_terminal_states_are_final(self) -> None:
        with self.assertRaises(InvalidTransitionError):
            check_transition(AppointmentStatus, "completed", "scheduled")
        with self.assertRaises(InvalidTransitionError):
            check_transition(AppointmentStatus, "cancelled", "confirmed")

    def test_cannot_skip_to_completed(self) -> None:
        with self.assertRaises(InvalidTransitionError) as ctx:
            check_transition(AppointmentStatus, "scheduled", "completed")
        self.assertIn("scheduled", ctx.exception.message)
        self.assertIn("completed", ctx.exception.message)

    def test_unchanged_status_is_allowed(self) -> None:
        check_transition(AppointmentStatus, "completed", "completed")

    def test_unknown_target_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            check_transition(AppointmentStatus, "scheduled", "done")

    def test_legacy_stored_value_may_move_anywhere(self) -> None:
        check_transition(AppointmentStatus, "waiting", "completed")


class ShiftLifecycleTests(unittest.TestCase):
    def test_shift_moves_forward_only(self) -> None:
        check_transition(ShiftStatus, "scheduled", "active")
        check_transition(ShiftStatus, "active", "completed")
        with self.assertRaises(InvalidTransitionError):
            check_transition(ShiftStatus, "completed", "active")
        with self.assertRaises(InvalidTransitionError):
            check_transition(ShiftStatus, "active", "scheduled")


if __name__ == "__main__":
    unittest.main()
