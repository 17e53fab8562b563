from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class TerminalActivationDTO:
    """DTO for activating a terminal"""
    activation_start_date: date
    subscription_type_id: int
    work_order_no: Optional[str] = None
    work_order_date: Optional[date] = None


@dataclass
class TerminalSuspensionDTO:
    """DTO for suspending a terminal"""
    suspension_remarks: str
