"""Round coordination: the answer/guess barrier for a two-player room.

Each phase waits until two submissions have arrived, then advances. Invalid,
late, or duplicate submissions are ignored without a reply; the transport has
no response channel for them.
"""
import logging
from typing import Callable, Optional

from partnerquiz.models import Guess, Phase, Session
from .scoring import score_round
from .store import RoomStore

logger = logging.getLogger(__name__)

BARRIER_SIZE = 2


def _is_non_empty_text(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _accepting(session: Optional[Session], round_index, phase: Phase, connection_id: str) -> bool:
    if session is None or session.game_over:
        return False
    # bool is an int subclass; True must not match round 1
    if isinstance(round_index, bool) or round_index != session.round_index:
        return False
    if session.phase != phase:
        return False
    return connection_id not in session.pending_submitters


def _waiting_message(session: Session, connection_id: str, noun: str) -> dict:
    name = session.display_names.get(connection_id)
    return {'message': f'{name} has submitted their {noun}. Waiting for the other player...'}


def submit_answer(
    store: RoomStore,
    broadcast: Callable,
    room_code,
    round_index,
    connection_id: str,
    value,
) -> None:
    session = store.get(room_code)
    if not _accepting(session, round_index, Phase.ANSWERING, connection_id):
        return
    if not _is_non_empty_text(value):
        return
    # The client may send an equal float (0.0); key everything by the stored int
    round_index = session.round_index

    session.answers.setdefault(round_index, {})[connection_id] = value
    session.pending_submitters.add(connection_id)
    session.touch()

    if len(session.pending_submitters) >= BARRIER_SIZE:
        session.pending_submitters.clear()
        session.phase = Phase.GUESSING
        logger.info(f"[phase] room={room_code} round={round_index} answer -> guess")
        broadcast('startGuessPhase', {
            'question': session.questions[round_index],
            'questionIndex': round_index,
        }, room_code)
    else:
        broadcast('waitingForPartner', _waiting_message(session, connection_id, 'answer'), room_code)


def submit_guess(
    store: RoomStore,
    broadcast: Callable,
    room_code,
    round_index,
    connection_id: str,
    guess_value,
    target_connection_id=None,
) -> None:
    session = store.get(room_code)
    if not _accepting(session, round_index, Phase.GUESSING, connection_id):
        return
    if not _is_non_empty_text(guess_value):
        return
    round_index = session.round_index

    session.guesses.setdefault(round_index, {})[connection_id] = Guess(guess_value, target_connection_id)
    session.pending_submitters.add(connection_id)
    session.touch()

    if len(session.pending_submitters) < BARRIER_SIZE:
        broadcast('waitingForPartner', _waiting_message(session, connection_id, 'guess'), room_code)
        return

    session.pending_submitters.clear()
    awarded = score_round(session, round_index)
    logger.info(f"[score] room={room_code} round={round_index} awarded={awarded}")

    broadcast('updateScores', dict(session.scores), room_code)
    broadcast('revealAnswers', {
        'questionIndex': round_index,
        'answers': session.answers_for(round_index),
        'guesses': session.guesses_for(round_index),
        'playerNames': dict(session.display_names),
    }, room_code)

    session.round_index += 1
    if not session.game_over:
        session.phase = Phase.ANSWERING
        logger.info(f"[next_round] room={room_code} advance round {round_index} -> {session.round_index}")
        broadcast('startAnswerPhase', {
            'question': session.current_question,
            'questionIndex': session.round_index,
        }, room_code)
    else:
        logger.info(f"[finish] room={room_code} finished after {session.round_index} rounds scores={session.scores}")
        broadcast('gameOver', {
            'scores': dict(session.scores),
            'playerNames': dict(session.display_names),
        }, room_code)
