"""
Pydantic Schemas for the JSON files the engine is bootstrapped from.

Two documents:
- Game configuration: cards, piles (with incoming rules), tableaux, initial moves
- Game state: the snapshot at game start (or any saved point)

Keys are camelCase on disk and snake_case in Python.
"""

from typing import Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from ..engine_core.state import (
    GameState,
    PileState,
    TableauState,
    Phase,
)
from .definitions import (
    CardDefinition,
    GameConfig,
    InitialMove,
    PileDefinition,
    TableauDefinition,
)


_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


# =============================================================================
# Configuration file
# =============================================================================

class CardModel(BaseModel):
    """A card record. originalHealthValue defaults to healthValue."""
    id: str
    name: str = ""
    rank: str = ""
    category: str = ""
    url: str = ""
    attack_value: int = 0
    health_value: int = 0
    original_health_value: Optional[int] = None

    model_config = _CAMEL


class PileModel(BaseModel):
    """A pile definition with its incoming edge rules."""
    id: str
    name: str = ""
    incoming: list[str] = Field(default_factory=list)
    incoming_attack: list[str] = Field(default_factory=list)
    initial_shuffle: bool = False
    show_back: bool = False
    allow_show_front: bool = False
    unfolded: bool = False
    sort: bool = False

    model_config = _CAMEL


class TableauModel(BaseModel):
    """A player's board half."""
    id: str
    name: str = ""
    piles: list[str] = Field(default_factory=list)

    model_config = _CAMEL


class InitialMoveModel(BaseModel):
    """A non-manual move performed by the initial deal."""
    from_pile: str = Field(alias="from")
    to_pile: str = Field(alias="to")
    amount: int = 0
    card: Optional[str] = None

    model_config = _CAMEL


class GameConfigFile(BaseModel):
    """Top-level configuration document."""
    cards: list[CardModel] = Field(default_factory=list)
    piles: list[PileModel] = Field(default_factory=list)
    tableaux: list[TableauModel] = Field(default_factory=list)
    initial_moves: list[InitialMoveModel] = Field(default_factory=list)

    model_config = _CAMEL

    def to_config(self) -> GameConfig:
        return GameConfig(
            cards=[
                CardDefinition(
                    id=c.id,
                    name=c.name,
                    rank=c.rank,
                    category=c.category,
                    url=c.url,
                    attack_value=c.attack_value,
                    health_value=c.health_value,
                    original_health_value=(
                        c.health_value if c.original_health_value is None
                        else c.original_health_value
                    ),
                )
                for c in self.cards
            ],
            piles=[PileDefinition(**p.model_dump()) for p in self.piles],
            tableaux=[TableauDefinition(**t.model_dump()) for t in self.tableaux],
            initial_moves=[InitialMove(**m.model_dump()) for m in self.initial_moves],
        )

    @classmethod
    def from_config(cls, config: GameConfig) -> "GameConfigFile":
        return cls(
            cards=[CardModel(**vars(c)) for c in config.cards],
            piles=[PileModel(**vars(p)) for p in config.piles],
            tableaux=[TableauModel(**vars(t)) for t in config.tableaux],
            initial_moves=[InitialMoveModel(**vars(m)) for m in config.initial_moves],
        )


# =============================================================================
# State file
# =============================================================================

class PileStateModel(BaseModel):
    cards: list[str] = Field(default_factory=list)
    is_shuffling: bool = False
    show_back: bool = False
    unfolded: bool = False
    has_acted: bool = False
    last_incoming_move_validity: bool = True
    last_incoming_attack_validity: bool = True

    model_config = _CAMEL


class TableauStateModel(BaseModel):
    piles: list[str] = Field(default_factory=list)

    model_config = _CAMEL


class GameStateFile(BaseModel):
    """A serialized GameState snapshot."""
    tableaux: dict[str, TableauStateModel] = Field(default_factory=dict)
    piles: dict[str, PileStateModel] = Field(default_factory=dict)
    allow_invalid_moves: bool = False
    player1_turn: bool = Field(True, alias="player1Turn")
    phase: Phase = Phase.DRAW
    has_drawn: bool = False
    ended: bool = False
    winner: Optional[str] = None

    model_config = _CAMEL

    def to_state(self) -> GameState:
        return GameState(
            tableaux={key: TableauState(**t.model_dump()) for key, t in self.tableaux.items()},
            piles={key: PileState(**p.model_dump()) for key, p in self.piles.items()},
            allow_invalid_moves=self.allow_invalid_moves,
            player1_turn=self.player1_turn,
            phase=self.phase,
            has_drawn=self.has_drawn,
            ended=self.ended,
            winner=self.winner,
        )

    @classmethod
    def from_state(cls, state: GameState) -> "GameStateFile":
        return cls(
            tableaux={key: TableauStateModel(piles=list(t.piles)) for key, t in state.tableaux.items()},
            piles={
                key: PileStateModel(
                    cards=list(p.cards),
                    is_shuffling=p.is_shuffling,
                    show_back=p.show_back,
                    unfolded=p.unfolded,
                    has_acted=p.has_acted,
                    last_incoming_move_validity=p.last_incoming_move_validity,
                    last_incoming_attack_validity=p.last_incoming_attack_validity,
                )
                for key, p in state.piles.items()
            },
            allow_invalid_moves=state.allow_invalid_moves,
            player1_turn=state.player1_turn,
            phase=state.phase,
            has_drawn=state.has_drawn,
            ended=state.ended,
            winner=state.winner,
        )
