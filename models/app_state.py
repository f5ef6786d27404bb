from sqlalchemy import Column, String, Text, DateTime, func
from database.db import Base

class AppState(Base):
    __tablename__ = "app_state"  # 브라우저 localStorage를 대신하는 key/value 테이블

    key = Column(String(64), primary_key=True, index=True)   # 상태 키 (예: grades, tasks, user)
    value = Column(Text, nullable=False)                     # JSON 직렬화된 값
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())  # 마지막 저장 시각
