"""Register storage backing the editor's internal clipboard."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

UNNAMED_REGISTER = '"'


@dataclass(slots=True)
class RegisterValue:
    text: str
    source: str = "copy"


class RegisterBank:
    """Named registers; every write also lands in the unnamed register."""

    def __init__(self) -> None:
        self._registers: Dict[str, RegisterValue] = {
            UNNAMED_REGISTER: RegisterValue(text="")
        }

    def get(self, name: str = UNNAMED_REGISTER) -> RegisterValue:
        return self._registers.get(name, RegisterValue(text=""))

    def set(self, name: str, value: RegisterValue) -> None:
        self._registers[name] = value
        if name != UNNAMED_REGISTER:
            self._registers[UNNAMED_REGISTER] = value

    def yank_to(self, name: str, text: str, *, source: str = "copy") -> None:
        self.set(name, RegisterValue(text=text, source=source))

    @property
    def clipboard(self) -> str:
        return self.get(UNNAMED_REGISTER).text

    def copy(self, text: str, *, source: str = "copy") -> None:
        self.yank_to(UNNAMED_REGISTER, text, source=source)
