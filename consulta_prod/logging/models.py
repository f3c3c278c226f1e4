"""Database models for the logging module."""

from datetime import datetime

from sqlalchemy import Column, DateTime, Float, Integer, String, Text

from consulta_prod.core.database import Base


class Log(Base):
    """API request and response log row."""

    __tablename__ = "log"

    id = Column(Integer, primary_key=True, index=True)
    timestamp = Column(DateTime, default=datetime.now, index=True)
    method = Column(String(10), nullable=False)
    path = Column(String(500), nullable=False)
    status_code = Column(Integer, nullable=False)
    client_ip = Column(String(64), nullable=True)
    request_headers = Column(Text, nullable=True)
    request_body = Column(Text, nullable=True)
    response_body = Column(Text, nullable=True)
    processing_time = Column(Float, nullable=True)
    user_agent = Column(String(500), nullable=True)
    username = Column(String(100), nullable=True)
    hostname = Column(String(255), nullable=True)
    application_id = Column(String(100), nullable=True)
