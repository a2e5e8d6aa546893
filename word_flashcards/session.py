"""Word-Pair Session: the state machine behind one flash card view.

The session holds the current display state, talks to a Word Source, and
notifies listeners synchronously after every transition. At most one fetch is
outstanding at any time; requests made while a fetch is in flight are dropped.
Listeners run while the fetch guard is held, so a listener that asks for the
next word in response to Loading or to the fetched result is dropped too. A
listener that raises is logged and does not stop the transition.
"""

import threading
from collections.abc import Callable

from loguru import logger

from word_flashcards.models import Empty, Error, Loaded, Loading, SessionState, WordPair
from word_flashcards.word_source import (
    EMPTY_RESULT_MESSAGE,
    LOAD_FAILURE_MESSAGE,
    WordSource,
    WordSourceError,
)

Listener = Callable[[SessionState], None]
FetchOutcome = WordPair | None | Exception


class WordPairSession:
    """Tracks the displayed word pair for one flash card session.

    Attributes:
        source: Word Source the session fetches from
        max_repeat_retries: Extra fetches made when the source hands back the
            word that is already on display
    """

    def __init__(self, source: WordSource, max_repeat_retries: int = 1):
        """Initialize the session in the Loading state with nothing fetched.

        Args:
            source: Word Source to fetch word pairs from
            max_repeat_retries: How many times to re-fetch when the next word
                repeats the current one (0 disables repeat avoidance)

        Raises:
            ValueError: If max_repeat_retries is negative
        """
        if max_repeat_retries < 0:
            msg = "max_repeat_retries cannot be negative"
            logger.error(msg)
            raise ValueError(msg)

        self.source = source
        self.max_repeat_retries = max_repeat_retries
        self._state: SessionState = Loading()
        self._listeners: list[Listener] = []
        self._in_flight = threading.Lock()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_fetching(self) -> bool:
        return self._in_flight.locked()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with the new state after each transition.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def initialize(self) -> bool:
        """Enter Loading and fetch the first word pair.

        Also serves as the recovery path from Empty and Error.

        Returns:
            True if a fetch was dispatched, False if one was already in flight
        """
        return self._dispatch(previous_english=None)

    def request_next_word(self) -> bool:
        """Replace the current word pair with a freshly fetched one.

        Ignored while Loading. If the source hands back the English word that
        is currently displayed, the fetch is repeated up to max_repeat_retries
        times before the repeat is accepted.

        Returns:
            True if a fetch was dispatched, False if the request was dropped
        """
        current = self._state
        if isinstance(current, Loading):
            logger.info("Ignoring next-word request while a word is loading")
            return False

        previous = current.pair.english if isinstance(current, Loaded) else None
        return self._dispatch(previous_english=previous)

    def reveal_answer(self) -> bool:
        """Show the German translation of the current pair.

        Idempotent: revealing an already revealed answer changes nothing and
        emits no notification.

        Returns:
            True if the state changed, False otherwise
        """
        current = self._state
        if not isinstance(current, Loaded):
            logger.debug(f"No answer to reveal in state {type(current).__name__}")
            return False
        if current.answer_revealed:
            return False

        self._transition(current.revealed())
        return True

    def handle_fetch_result(self, outcome: FetchOutcome) -> SessionState:
        """Route a fetch outcome to the matching state.

        Args:
            outcome: A WordPair, None for an empty result, or the exception
                raised while fetching

        Returns:
            The new state
        """
        if isinstance(outcome, WordPair):
            new_state: SessionState = Loaded(pair=outcome)
        elif outcome is None:
            new_state = Empty(message=EMPTY_RESULT_MESSAGE)
        else:
            new_state = Error(message=LOAD_FAILURE_MESSAGE)

        self._transition(new_state)
        return new_state

    def _dispatch(self, previous_english: str | None) -> bool:
        if not self._in_flight.acquire(blocking=False):
            logger.info("Word fetch already in flight, dropping request")
            return False

        # The final state is published before the guard is released.
        try:
            self._transition(Loading())
            self.handle_fetch_result(self._fetch(previous_english))
        finally:
            self._in_flight.release()
        return True

    def _fetch(self, previous_english: str | None) -> FetchOutcome:
        attempts = 1 + (self.max_repeat_retries if previous_english is not None else 0)
        repeated: WordPair | None = None

        for attempt in range(attempts):
            try:
                outcome = self.source.fetch_word()
            except WordSourceError as e:
                logger.warning(f"Word fetch failed: {type(e).__name__}")
                outcome = e
            except Exception as e:
                logger.exception("Unexpected error from Word Source")
                outcome = e

            if repeated is not None and not isinstance(outcome, WordPair):
                logger.debug(f"Repeat retry gave no new word, keeping '{previous_english}'")
                return repeated
            if not (isinstance(outcome, WordPair) and outcome.english == previous_english):
                return outcome

            repeated = outcome
            if attempt < attempts - 1:
                logger.debug(f"Source repeated '{previous_english}', fetching again")

        logger.debug(f"Accepting repeated word '{previous_english}'")
        return repeated

    def _transition(self, new_state: SessionState) -> None:
        logger.debug(f"Session state: {type(self._state).__name__} -> {type(new_state).__name__}")
        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception(f"Session listener {listener!r} failed")
