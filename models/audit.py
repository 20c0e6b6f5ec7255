from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class AuditEntry:
    timestamp: datetime
    action: str              # "set_capacity", "reset_capacity", "reset_all", "load_data"
    school_id: Optional[str]
    old_value: str
    new_value: str
    rationale: str = ""
