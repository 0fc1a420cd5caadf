"""Data models."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field, model_validator

PlayerID = int
ColorID = int

HexColor = Annotated[str, Field(pattern=r"^#?[0-9A-Fa-f]{6}$")]


class HumanKind(BaseModel):
    """Player controlled from outside (input layer)."""

    kind: Literal["human"] = "human"


class BotKind(BaseModel):
    """Player controlled by the greedy AI."""

    kind: Literal["bot"] = "bot"
    delay_ticks: Annotated[int, Field(ge=0)] = 0


PlayerKind = Annotated[HumanKind | BotKind, Field(discriminator="kind")]


class Player(BaseModel):
    """Player information.

    The score is derived from the board and is overwritten on every evaluation.
    """

    id: PlayerID
    name: str
    color: HexColor = "#00FFFF"
    kind: PlayerKind = HumanKind()
    score: int = 0


class ColorLabel(BaseModel):
    """Appearance of a color id."""

    name: str
    hex: HexColor


class GameInfo(BaseModel):
    """Game setup info."""

    min_colors: int
    max_colors: int
    palette: dict[ColorID, ColorLabel]
    human_color: HexColor
    bot_color: HexColor

    @model_validator(mode="after")
    def _chk_palette(self) -> "GameInfo":
        """Ensure the palette can serve the maximum color count."""
        if not 0 < self.min_colors <= self.max_colors:
            raise ValueError(
                f"Bad color range: [{self.min_colors}, {self.max_colors}]"
            )
        if len(self.palette) < self.max_colors:
            raise ValueError(
                f"Palette has {len(self.palette)} colors, need {self.max_colors}"
            )
        return self

    def select_colors(self, n_colors: int) -> dict[ColorID, ColorLabel]:
        """Get the first `n_colors` palette entries, by ascending id."""
        if not self.min_colors <= n_colors <= self.max_colors:
            raise ValueError(
                f"Color count {n_colors} not within "
                f"[{self.min_colors}, {self.max_colors}]"
            )
        ids = sorted(self.palette)[:n_colors]
        return {i: self.palette[i] for i in ids}

    def make_human(self, id: PlayerID, name: str = "Player") -> Player:
        """Create a human player with the default color."""
        return Player(id=id, name=name, color=self.human_color, kind=HumanKind())

    def make_bot(self, id: PlayerID, name: str = "Bot", delay_ticks: int = 0) -> Player:
        """Create a bot player with the default color."""
        return Player(
            id=id,
            name=name,
            color=self.bot_color,
            kind=BotKind(delay_ticks=delay_ticks),
        )
