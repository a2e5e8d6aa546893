"""Value types for word pairs and the display state of a flash card session.

A session is always in exactly one of four states. Each state is an immutable
value; a transition replaces the state object instead of mutating it.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class WordPair(BaseModel):
    """An English word and its German translation.

    Both fields are stripped and must be non-empty. The legacy column names
    ``english_word`` / ``german_word`` are accepted when validating payloads.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    english: str = Field(min_length=1, validation_alias=AliasChoices("english", "english_word"))
    german: str = Field(min_length=1, validation_alias=AliasChoices("german", "german_word"))


class Loading(BaseModel):
    """A fetch is outstanding, or nothing has been loaded yet."""

    model_config = ConfigDict(frozen=True)


class Loaded(BaseModel):
    """A word pair is on display."""

    model_config = ConfigDict(frozen=True)

    pair: WordPair
    answer_revealed: bool = False

    def revealed(self) -> "Loaded":
        return self.model_copy(update={"answer_revealed": True})


class Empty(BaseModel):
    """The Word Source had no word to offer."""

    model_config = ConfigDict(frozen=True)

    message: str


class Error(BaseModel):
    """The Word Source could not be reached or answered with garbage."""

    model_config = ConfigDict(frozen=True)

    message: str


SessionState = Loading | Loaded | Empty | Error
