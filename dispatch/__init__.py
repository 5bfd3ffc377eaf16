#Expose the high-level pipeline pieces:
#Partner location (hard rules + radius)
#Scoring / ranking
#Offers (auto-accept or the acceptance board)
#Dispatch cascade (the "one call" entry point)

from .models import DispatchStage, DispatchAttempt, DispatchOutcome
from .policy import DispatchPolicy, default_dispatch_policy
from .candidate_filter import find_nearby
from .scoring import rank, rank_all, RankedCandidate
from .ledger import InMemoryDispatchLedger
from .analytics import DispatchSummary, summarize_dispatch
from .offers import OfferBoard, auto_accept
from .dispatcher import DispatchCascade, DispatchInProgressError #the main class to call to dispatch an order

__all__ = [
    "DispatchStage",
    "DispatchAttempt",
    "DispatchOutcome",
    "DispatchPolicy",
    "default_dispatch_policy",
    "find_nearby",
    "rank",
    "rank_all",
    "RankedCandidate",
    "InMemoryDispatchLedger",
    "DispatchSummary",
    "summarize_dispatch",
    "OfferBoard",
    "auto_accept",
    "DispatchCascade",
    "DispatchInProgressError",
]
