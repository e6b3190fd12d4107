"""
Notification and toast schemas.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from enum import Enum


class NotificationType(str, Enum):
    """Inbox notification categories"""
    INFO = "info"
    WARNING = "warning"
    PAYMENT = "payment"
    REMINDER = "reminder"


class Notification(BaseModel):
    """Inbox notification (local only, never persisted remotely)"""
    id: str
    title: str
    message: str
    time: str
    type: NotificationType
    read: bool = False


class ToastVariant(str, Enum):
    """Transient message variants"""
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


class Toast(BaseModel):
    """Dismissable transient message shown after an action"""
    title: str
    message: str = ""
    variant: ToastVariant = ToastVariant.INFO
    duration: Optional[int] = 4000
    timestamp: datetime = Field(default_factory=datetime.now)
