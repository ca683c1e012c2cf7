"""Conversation and usage data models."""

from dataclasses import dataclass, field

FIRST_ROUND = 1
FINAL_ROUND = 4
QUESTION_ROUNDS = (1, 2, 3)


@dataclass
class Conversation:
    """Refinement conversation of one user.

    ``questions[r]`` holds the assistant's questions recorded when round ``r``
    completed; ``answers[r]`` holds the user's reply to them, consumed at the
    start of round ``r + 1``.
    """

    round: int = FIRST_ROUND
    initial_request: str = ""
    questions: dict[int, str] = field(default_factory=dict)
    answers: dict[int, str] = field(default_factory=dict)

    def copy(self) -> "Conversation":
        """Return an independent copy, safe to mutate during a turn."""
        return Conversation(
            round=self.round,
            initial_request=self.initial_request,
            questions=dict(self.questions),
            answers=dict(self.answers),
        )


@dataclass
class UsageRecord:
    """Generations performed by one user on one UTC day."""

    date: str
    count: int = 0

    def to_dict(self) -> dict[str, object]:
        return {"date": self.date, "count": self.count}

    @classmethod
    def from_dict(cls, data: dict) -> "UsageRecord":
        return cls(date=str(data["date"]), count=int(data.get("count", 0)))


@dataclass
class LimitStatus:
    """Outcome of a quota check."""

    allowed: bool
    remaining: int


@dataclass
class TurnResult:
    """Result of handling one user message."""

    reply: str
    is_final_generation: bool
    current_round: int
    remaining_prompts: int
