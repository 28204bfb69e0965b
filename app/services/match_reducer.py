"""
Pure state transitions for the match store.

Each action is a tagged pydantic model; ``reduce`` maps (state, action) to a
new state and never performs I/O. Inputs are validated before dispatch.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.match import LastMessage, Match


class MatchState(BaseModel):
    matches: tuple[Match, ...] = ()
    loading: bool = True
    error: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def active_matches(self) -> list[Match]:
        return [match for match in self.matches if not match.is_unmatched]


class SetMatches(BaseModel):
    type: Literal["SET_MATCHES"] = "SET_MATCHES"
    matches: list[Match]


class AddMatch(BaseModel):
    type: Literal["ADD_MATCH"] = "ADD_MATCH"
    match: Match


class Unmatch(BaseModel):
    type: Literal["UNMATCH"] = "UNMATCH"
    match_id: str


class AddMessage(BaseModel):
    type: Literal["ADD_MESSAGE"] = "ADD_MESSAGE"
    match_id: str
    message: LastMessage


class SetLoading(BaseModel):
    type: Literal["SET_LOADING"] = "SET_LOADING"
    loading: bool


class SetError(BaseModel):
    type: Literal["SET_ERROR"] = "SET_ERROR"
    error: str | None


class ClearMatches(BaseModel):
    type: Literal["CLEAR_MATCHES"] = "CLEAR_MATCHES"


MatchAction = Annotated[
    Union[SetMatches, AddMatch, Unmatch, AddMessage, SetLoading, SetError, ClearMatches],
    Field(discriminator="type"),
]


def reduce(state: MatchState, action: MatchAction) -> MatchState:
    if isinstance(action, SetMatches):
        return state.model_copy(update={"matches": tuple(action.matches), "loading": False})

    if isinstance(action, AddMatch):
        return state.model_copy(update={"matches": (action.match, *state.matches)})

    if isinstance(action, Unmatch):
        matches = tuple(
            match.model_copy(update={"is_unmatched": True})
            if match.id == action.match_id
            else match
            for match in state.matches
        )
        return state.model_copy(update={"matches": matches})

    if isinstance(action, AddMessage):
        matches = tuple(
            match.model_copy(update={"last_message": action.message})
            if match.id == action.match_id
            else match
            for match in state.matches
        )
        return state.model_copy(update={"matches": matches})

    if isinstance(action, SetLoading):
        return state.model_copy(update={"loading": action.loading})

    if isinstance(action, SetError):
        return state.model_copy(update={"error": action.error, "loading": False})

    if isinstance(action, ClearMatches):
        return state.model_copy(update={"matches": ()})

    return state
