from employee_tracker.models.employee import Employee
from employee_tracker.models.clock import ActiveSession, ClockLog, CLOCK_IN, CLOCK_OUT

__all__ = ["Employee", "ActiveSession", "ClockLog", "CLOCK_IN", "CLOCK_OUT"]
