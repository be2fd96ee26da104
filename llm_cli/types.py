from dataclasses import dataclass
from typing import Any

@dataclass(frozen=True)
class ProviderReply:
    provider: str
    model: str
    text: str
    elapsed_s: float
    raw: Any = None
