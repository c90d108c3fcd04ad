"""
卡牌与卡牌集合模块.

提供Card、CardCollection以及Deck/Hand/DiscardPile三种集合，和Fisher-Yates洗牌.
"""

from .card import Card
from .collection import CardCollection
from .deck import Deck
from .discard_pile import DiscardPile
from .hand import Hand
from .shuffle import fisher_yates_shuffle
from .types import RANKS, TEN_VALUE_RANKS, Suit, get_all_suits, standard_card_properties

__all__ = [
    'Card', 'CardCollection', 'Deck', 'Hand', 'DiscardPile',
    'fisher_yates_shuffle',
    'Suit', 'RANKS', 'TEN_VALUE_RANKS', 'get_all_suits', 'standard_card_properties',
]
