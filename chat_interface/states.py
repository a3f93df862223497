"""
Session State - the single logged-in identity and the latest QR challenge

Owned and mutated by the session handlers; the operator surfaces only read it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SessionPhase(str, Enum):
    LOGGED_OUT = "logged_out"
    AWAITING_SCAN = "awaiting_scan"
    LOGGED_IN = "logged_in"


@dataclass
class SessionState:
    logged_in_name: str = ""
    current_qr_svg: Optional[str] = None
    phase: SessionPhase = SessionPhase.LOGGED_OUT

    @property
    def is_logged_in(self) -> bool:
        return bool(self.logged_in_name)

    def qr_issued(self, svg: str) -> None:
        self.current_qr_svg = svg
        # A fresh challenge while logged in does not end the session
        if self.phase is not SessionPhase.LOGGED_IN:
            self.phase = SessionPhase.AWAITING_SCAN

    def logged_in(self, name: str) -> None:
        self.logged_in_name = name
        self.phase = SessionPhase.LOGGED_IN

    def logged_out(self) -> None:
        self.logged_in_name = ""
        self.phase = SessionPhase.LOGGED_OUT
