from src.auction_core.auction_session import AuctionObserver, AuctionSession
from src.auction_core.bid_resolver import BidResolver
from src.auction_core.bid_rules import BidRules, InvalidBidError, RoundStateError
from src.auction_core.models import (
    BidResolution,
    PickedPlayer,
    Player,
    PlayingRole,
    Round,
    RoundStatus,
    SealedBid,
    TeamState,
    Tier,
)
from src.auction_core.reserve import ReserveCalculator, max_allowable_bid
from src.auction_core.rng import SeededRandom

__all__ = [
    "AuctionObserver",
    "AuctionSession",
    "BidResolution",
    "BidResolver",
    "BidRules",
    "InvalidBidError",
    "PickedPlayer",
    "Player",
    "PlayingRole",
    "ReserveCalculator",
    "Round",
    "RoundStateError",
    "RoundStatus",
    "SeededRandom",
    "SealedBid",
    "TeamState",
    "Tier",
    "max_allowable_bid",
]
