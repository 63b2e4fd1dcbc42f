from sqlalchemy import Column, Integer, String, DateTime, func
from employee_tracker.database import Base


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    username = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)  # passlib hash; legacy rows may be plain text
    role = Column(String, nullable=False, default="employee", server_default="employee")
    company = Column(String, nullable=False, default="N/A", server_default="N/A")
    manager = Column(String, nullable=False, default="N/A", server_default="N/A")
    work_type = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
