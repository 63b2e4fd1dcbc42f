from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, UniqueConstraint
from employee_tracker.database import Base

CLOCK_IN = "Clock In"
CLOCK_OUT = "Clock Out"


class ClockLog(Base):
    __tablename__ = "clock_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    user_name = Column(String, nullable=True)  # snapshot at event time
    action = Column(String, nullable=False)  # "Clock In" or "Clock Out"
    time = Column(DateTime(timezone=True), nullable=False, index=True)
    work_type = Column(String, nullable=True)
    ip_address = Column(String, nullable=True)
    location = Column(String, nullable=True)
    geolocation = Column(JSON, nullable=True)
    duration = Column(String, nullable=True)  # only on "Clock Out"


class ActiveSession(Base):
    __tablename__ = "active_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("employees.id"), nullable=False)
    clock_in_time = Column(DateTime(timezone=True), nullable=False)

    # One open session per employee; this is what actually stops double clock-ins.
    __table_args__ = (UniqueConstraint("user_id", name="uq_active_sessions_user"),)
