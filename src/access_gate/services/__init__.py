"""Application services — gate operations and the access listener."""

from access_gate.services.gate_service import (
    AccessGate,
    Gate,
    SimpleAccessGate,
    build_gate,
)
from access_gate.services.listener import AccessListener

__all__ = ["AccessGate", "AccessListener", "Gate", "SimpleAccessGate", "build_gate"]
