from typing import Dict

from partnerquiz.models import Session

POINTS_PER_MATCH = 10


def score_round(session: Session, round_index: int) -> Dict[str, int]:
    """Apply scoring for ``round_index`` and return the points awarded.

    Each participant guesses the other's answer: +POINTS_PER_MATCH to the
    guesser when the guess equals the partner's answer exactly. Pairing uses
    participant order (0 guesses 1, 1 guesses 0). A missing answer or guess
    awards nothing.
    """
    awarded: Dict[str, int] = {}
    if len(session.participants) < 2:
        return awarded
    first, second = session.participants[0], session.participants[1]
    answers = session.answers.get(round_index, {})
    guesses = session.guesses.get(round_index, {})
    for guesser, target in ((first, second), (second, first)):
        guess = guesses.get(guesser)
        answer = answers.get(target)
        if guess is None or answer is None:
            continue
        if guess.value == answer:
            session.scores[guesser] = session.scores.get(guesser, 0) + POINTS_PER_MATCH
            awarded[guesser] = POINTS_PER_MATCH
    return awarded
