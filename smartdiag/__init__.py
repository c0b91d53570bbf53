"""smartdiag - smartctl output parsing and disk health assessment."""

__version__ = "1.0.0"

from smartdiag.engine import SmartInformation
from smartdiag.executor import ExecutionError, ExecutionGate, SmartDiagError
from smartdiag.models import (
    Attribute,
    Device,
    DeviceReport,
    InformationKind,
    SelfTestLogEntry,
    Verdict,
)

__all__ = [
    "Attribute",
    "Device",
    "DeviceReport",
    "ExecutionError",
    "ExecutionGate",
    "InformationKind",
    "SelfTestLogEntry",
    "SmartDiagError",
    "SmartInformation",
    "Verdict",
]
