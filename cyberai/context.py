"""
Context-window trimming.

Token counts are estimated as ``ceil(len(text) / 4)``. This is a heuristic,
not a tokenizer: real provider counts differ, so callers should leave
headroom. Pass ``estimator=`` to plug in a real tokenizer; doing so moves
the trimming boundaries.
"""
import math
from typing import Callable, List, Sequence

from .schema import Message

CHARS_PER_TOKEN = 4

Estimator = Callable[[str], int]


def estimate_tokens(text: str) -> int:
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def context_cost(history: Sequence[Message], estimator: Estimator = estimate_tokens) -> int:
    return sum(estimator(m.content) for m in history)


def optimize_context(
    history: Sequence[Message],
    token_budget: int,
    estimator: Estimator = estimate_tokens,
) -> List[Message]:
    """
    Longest trailing run of ``history`` whose estimated cost fits ``token_budget``.

    - order is preserved
    - a message that lands exactly on the budget is kept
    - the most recent message is always kept, even when it alone is over
      budget, so non-empty input never yields an empty window
    - a non-positive budget keeps only the most recent message
    """
    if not history:
        return []
    if token_budget <= 0:
        return [history[-1]]

    total = 0
    picked: List[Message] = []
    for msg in reversed(history):
        cost = estimator(msg.content)
        if picked and total + cost > token_budget:
            break
        picked.append(msg)
        total += cost
    picked.reverse()
    return picked
