from __future__ import annotations

from dataclasses import dataclass


LINE_BREAKS = ("\n", "\r")


@dataclass
class Task:
    name: str
    description: str = ""
    completed: bool = False

    def __post_init__(self) -> None:
        # one task per line, name ends at the first colon
        if ":" in self.name:
            raise ValueError("Task name cannot contain ':'")
        if any(ch in field for field in (self.name, self.description) for ch in LINE_BREAKS):
            raise ValueError("Task text cannot contain line breaks")

    @classmethod
    def from_line(cls, line: str) -> Task:
        """Parse ``name:description``; a line without a colon is a bare name."""
        name, _sep, description = line.partition(":")
        return cls(name=name.strip(), description=description.strip())

    def to_line(self) -> str:
        return f"{self.name}:{self.description}"

    def __str__(self) -> str:
        mark = "x" if self.completed else " "
        if self.description:
            return f"[{mark}] {self.name}: {self.description}"
        return f"[{mark}] {self.name}"
