"""
Profile Builder - turn questionnaire answers into a Profile.

The questionnaire has eleven multiple-choice questions answered 1-3:

    Q1  bedtime            1 early ... 3 late
    Q2  tidiness           1 clean ... 3 messy
    Q3  weekend rhythm     1 active ... 3 sleeps in
    Q4  sense of smell     1 sensitive ... 3 dull
    Q5  free time          1 alone ... 3 with people
    Q6  trips home         1 weekly ... 3 stays in the dorm
    Q7  alarm response     1 instant ... 3 sleeps through
    Q8  sharing things     1 strict ... 3 free
    Q9  temperature        1 cold-sensitive ... 3 heat-sensitive
    Q10 noise reaction     1 sensitive ... 3 tolerant
    Q11 roommate wish      1 no preference, 2 named (extra text), 3 stay

Missing answers count as 2. The mapping is deterministic.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable

from pydantic import BaseModel, Field

from rooming.models import Archetype, Habits, Preference, Profile

logger = logging.getLogger(__name__)

DEFAULT_ANSWER = 2
MAX_TRAITS = 3

SLEEP_TIMES = {1: "10:30 PM", 2: "12:00 AM", 3: "02:30 AM"}

ARCHETYPE_TRAITS: dict[Archetype, list[str]] = {
    Archetype.HAMSTER: ["very cold-sensitive", "homebody"],
    Archetype.RABBIT: ["sound-sensitive", "slow to warm up", "needs quiet"],
    Archetype.OWL: ["comes alive at night", "inspiration-driven"],
    Archetype.LARK: ["productive mornings", "regular routine"],
    Archetype.CAT: ["very tidy", "values privacy"],
    Archetype.PUPPY: ["social butterfly", "dislikes being alone"],
    Archetype.PEACOCK: ["easygoing", "not fussy about details"],
    Archetype.KOALA: ["peacemaker", "goes with the flow"],
}


class QuizAnswer(BaseModel):
    """One questionnaire answer."""

    question_id: int = Field(ge=1, le=11)
    value: int = Field(ge=1, le=3)
    extra_text: str | None = None


class QuizAnswers:
    """Lookup over a set of answers with the default for unanswered questions."""

    def __init__(self, answers: Iterable[QuizAnswer]) -> None:
        self._answers = {answer.question_id: answer for answer in answers}

    def value(self, question_id: int) -> int:
        answer = self._answers.get(question_id)
        return answer.value if answer else DEFAULT_ANSWER

    def answer(self, question_id: int) -> QuizAnswer | None:
        return self._answers.get(question_id)


def scale_to_metric(value: int) -> int:
    """Map a 1-3 answer onto the 1-10 habit scale (1 -> 4, 2 -> 7, 3 -> 10)."""
    return min(10, value * 3 + 1)


def determine_archetype(answers: QuizAnswers) -> Archetype:
    """Pick the archetype; the first matching rule wins."""
    sleep = answers.value(1)
    cleanliness = answers.value(2)
    weekend = answers.value(3)
    smell = answers.value(4)
    free_time = answers.value(5)
    home = answers.value(6)
    sharing = answers.value(8)
    temperature = answers.value(9)
    noise = answers.value(10)

    clean_score = (4 - cleanliness) + (4 - smell)
    social_score = free_time + sharing + (1 if home == 3 else 0)

    if temperature == 1 and (home == 3 or free_time == 1):
        return Archetype.HAMSTER
    if noise == 1 and free_time == 1:
        return Archetype.RABBIT
    if sleep == 3 and weekend >= 2:
        return Archetype.OWL
    if sleep == 1:
        return Archetype.LARK
    if clean_score >= 5 and sharing == 1:
        return Archetype.CAT
    if social_score >= 5:
        return Archetype.PUPPY
    if cleanliness == 3 and sharing >= 2:
        return Archetype.PEACOCK
    return Archetype.KOALA


def derive_traits(archetype: Archetype, answers: QuizAnswers) -> list[str]:
    """Archetype traits followed by answer-specific ones, deduplicated, at most three."""
    traits = list(ARCHETYPE_TRAITS[archetype])

    home = answers.value(6)
    if home == 1:
        traits.append("goes home weekly")
    if home == 3:
        traits.append("dorm guardian")
    if answers.value(9) == 3:
        traits.append("very heat-sensitive")
    if answers.value(7) == 3:
        traits.append("sleeps through alarms")
    if answers.value(4) == 1:
        traits.append("keen nose")

    wish = answers.answer(11)
    if wish and wish.value == 2:
        traits.append("has a designated roommate")
    if wish and wish.value == 3:
        traits.append("wants to stay")

    return list(dict.fromkeys(traits))[:MAX_TRAITS]


def parse_preferences(answers: QuizAnswers) -> list[Preference]:
    """Q11 to tagged preferences; a named wish without names counts as no preference."""
    wish = answers.answer(11)
    if wish and wish.value == 3:
        return [Preference.stay()]
    if wish and wish.value == 2 and wish.extra_text:
        names = [name.strip() for name in wish.extra_text.split(",")]
        named = [Preference.named(name) for name in names if name]
        if named:
            return named
    return [Preference.neutral()]


def build_profile(
    name: str,
    answers: Iterable[QuizAnswer],
    profile_id: str | None = None,
    gender: str | None = None,
    prior_room: str | None = None,
) -> Profile:
    """
    Build a Profile from questionnaire answers.

    Args:
        name: Student name
        answers: Answers to any subset of the eleven questions
        profile_id: Stable id; a random UUID when omitted
        gender: Raw gender text, typically from the roster
        prior_room: Current room label, typically from the roster

    Returns:
        Frozen Profile with habits, preferences, archetype and traits
    """
    quiz = QuizAnswers(answers)
    archetype = determine_archetype(quiz)

    habits = Habits(
        sleep_time=SLEEP_TIMES[quiz.value(1)],
        cleanliness=min(10, (4 - quiz.value(2)) * 3 + 1),
        social_energy=scale_to_metric(quiz.value(5)),
        noise_tolerance=scale_to_metric(quiz.value(7)),
        temperature=quiz.value(9),
    )

    profile = Profile(
        id=profile_id or str(uuid.uuid4()),
        name=name.strip(),
        gender=gender,
        prior_room=prior_room,
        habits=habits,
        preferences=parse_preferences(quiz),
        archetype=archetype,
        traits=derive_traits(archetype, quiz),
    )
    logger.debug(f"Built profile for {profile.name}: {archetype.value}, sleep {habits.sleep_phase.name}")
    return profile
