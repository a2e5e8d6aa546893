"""View contract for rendering a flash card session.

render() is a pure function from session state to what is visible, so any
front end (the terminal CLI, a web page, a test) shows the same thing for the
same state.
"""

from pydantic import BaseModel, ConfigDict

from word_flashcards.config import DEFAULT_APP_TITLE
from word_flashcards.models import Empty, Error, Loaded, Loading, SessionState

PAGE_TITLE = DEFAULT_APP_TITLE
LOADING_MESSAGE = "Loading word..."
NEXT_WORD_LABEL = "Next Word"
SHOW_ANSWER_LABEL = "Show Answer"


def _testid(name: str) -> str:
    return f'[data-testid="{name}"]'


class Selectors:
    """Stable element identifiers shared by the view and its tests."""

    ENGLISH_WORD = _testid("english-word")
    GERMAN_WORD = _testid("german-word")
    NEXT_WORD_BUTTON = _testid("new-word-button")
    SHOW_ANSWER_BUTTON = _testid("show-answer-button")
    ERROR_MESSAGE = _testid("error-message")
    LOADING_MESSAGE = _testid("loading-message")


class ViewState(BaseModel):
    """Visibility and text of every element of the flash card view."""

    model_config = ConfigDict(frozen=True)

    loading_visible: bool = False
    english_visible: bool = False
    german_visible: bool = False
    error_visible: bool = False
    english_text: str = ""
    german_text: str = ""
    error_text: str = ""


def render(state: SessionState) -> ViewState:
    """Compute the view for a session state.

    The German text is carried even while hidden, like a hidden DOM element
    keeps its content; only german_visible says whether to show it.
    """
    if isinstance(state, Loaded):
        return ViewState(
            english_visible=True,
            german_visible=state.answer_revealed,
            english_text=state.pair.english,
            german_text=state.pair.german,
        )
    if isinstance(state, Empty | Error):
        return ViewState(error_visible=True, error_text=state.message)
    if isinstance(state, Loading):
        return ViewState(loading_visible=True)

    msg = f"Unknown session state: {state!r}"
    raise TypeError(msg)
