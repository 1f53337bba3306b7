from enum import Enum
from typing import Dict


class Verdict(str, Enum):
    """Truth classification of a claim or a piece of evidence."""

    TRUE = "true"
    FALSE = "false"
    PARTIALLY_TRUE = "partially_true"
    UNVERIFIABLE = "unverifiable"


VERDICT_LABELS: Dict[Verdict, str] = {
    Verdict.TRUE: "TRUE",
    Verdict.FALSE: "FALSE",
    Verdict.PARTIALLY_TRUE: "PARTIALLY TRUE",
    Verdict.UNVERIFIABLE: "UNVERIFIABLE",
}
