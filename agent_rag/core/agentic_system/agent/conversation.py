"""
Append-only conversation history.

Dependencies: agent_rag.models
System role: Per-agent chat memory
"""

from agent_rag.models.chat import ConversationTurn, TurnRole


class ConversationHistory:
    """Ordered turns, opened by an optional system turn."""

    def __init__(self, system_prompt: str | None = None) -> None:
        self._system_prompt = system_prompt
        self._turns: list[ConversationTurn] = []
        self._seed()

    def _seed(self) -> None:
        if self._system_prompt:
            self._turns.append(ConversationTurn(role=TurnRole.SYSTEM, content=self._system_prompt))

    def append(self, turn: ConversationTurn) -> None:
        self._turns.append(turn)

    def turns(self) -> list[ConversationTurn]:
        return list(self._turns)

    def window(self, size: int | None = None) -> list[ConversationTurn]:
        """
        Turns to send to the LLM.

        System turns are always kept; `size` limits the remaining turns to
        the most recent ones. None returns the full history.
        """
        if size is None:
            return list(self._turns)
        system = [turn for turn in self._turns if turn.role == TurnRole.SYSTEM]
        dialogue = [turn for turn in self._turns if turn.role != TurnRole.SYSTEM]
        return system + (dialogue[-size:] if size else [])

    def reset(self) -> None:
        """Drop every turn except the opening system turn."""
        self._turns = []
        self._seed()

    def __len__(self) -> int:
        return len(self._turns)
